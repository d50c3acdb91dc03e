"""
Seed data for development.
Creates a small province/branch/store hierarchy through the domain services,
so the seeded rows carry audit entries like any other write.
"""

from sqlalchemy.orm import Session
from sqlalchemy import select

from rest_api.models import Province
from rest_api.services.domain import (
    ProvinceService,
    BranchService,
    StoreService,
    WhitelistStoreService,
)
from shared.config.logging import get_logger
from shared.utils.schemas import (
    BranchInput,
    EntityRef,
    ProvinceInput,
    StoreInput,
    WhitelistStoreInput,
)

logger = get_logger(__name__)

# Acting user recorded on seeded rows
SEED_USER = {"sub": 0, "email": "seed@indostore.local"}

# province -> branch -> [(store name, address)]
DEMO_HIERARCHY = {
    "Bali": {
        "Denpasar": [
            ("Store Kuta", "Jl. Raya Kuta No. 1"),
            ("Store Sanur", "Jl. Danau Tamblingan No. 12"),
        ],
        "Ubud": [
            ("Store Ubud Market", "Jl. Raya Ubud No. 8"),
        ],
    },
    "Jawa Barat": {
        "Bandung": [
            ("Store Dago", "Jl. Ir. H. Juanda No. 45"),
        ],
    },
}

# Store names that get a whitelist entry
WHITELISTED = {"Store Dago"}


def seed(db: Session) -> dict[str, int]:
    """
    Insert the demo hierarchy.
    Idempotent: does nothing when any province already exists.

    Returns:
        Count of rows created per entity.
    """
    counts = {"provinces": 0, "branches": 0, "stores": 0, "whitelist_stores": 0}

    if db.scalar(select(Province.id).limit(1)) is not None:
        logger.info("Provinces already seeded, skipping")
        return counts

    provinces = ProvinceService(db)
    branches = BranchService(db)
    stores = StoreService(db)
    whitelist = WhitelistStoreService(db)

    for province_name, branch_map in DEMO_HIERARCHY.items():
        province = provinces.create(ProvinceInput(name=province_name), SEED_USER)
        counts["provinces"] += 1

        for branch_name, store_rows in branch_map.items():
            branch = branches.create(
                BranchInput(name=branch_name, province=EntityRef(id=province.id)),
                SEED_USER,
            )
            counts["branches"] += 1

            for store_name, address in store_rows:
                store = stores.create(
                    StoreInput(name=store_name, address=address, branch=EntityRef(id=branch.id)),
                    SEED_USER,
                )
                counts["stores"] += 1

                if store_name in WHITELISTED:
                    whitelist.create(WhitelistStoreInput(store=EntityRef(id=store.id)), SEED_USER)
                    counts["whitelist_stores"] += 1

    logger.info("Seed data created", **counts)
    return counts
