"""
Province Service.

Handles province CRUD plus the two name searches.

Usage:
    from rest_api.services.domain import ProvinceService

    service = ProvinceService(db)
    provinces = service.search_by_name("bal", page=0, size=50)
    result = service.search_stores_by_province("bali", page=0, size=50)
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from rest_api.models import Province
from rest_api.repositories import (
    get_province_repository,
    get_store_repository,
    get_whitelist_store_repository,
)
from rest_api.services.base_service import BaseCRUDService, require_text
from shared.config.constants import AuditTable
from shared.utils.exceptions import NotFoundError
from shared.utils.pagination import paginate
from shared.utils.schemas import (
    ProvinceInput,
    ProvinceOutput,
    ProvinceStoresOutput,
    StoreOutput,
)


class ProvinceService(BaseCRUDService[Province, ProvinceOutput]):
    """
    Service for province management.

    Business rules:
    - Name must not be blank
    - Delete is soft; deleted provinces stay retrievable by id
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=get_province_repository(db),
            output_schema=ProvinceOutput,
            entity_name="Province",
            table_name=AuditTable.PROVINCES,
        )
        self._stores = get_store_repository(db)
        self._whitelist = get_whitelist_store_repository(db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def search_by_name(self, name: str, page: int, size: int) -> list[ProvinceOutput]:
        """Active provinces whose name contains `name`, ignoring case, paginated."""
        matches = self._repo.search_by_name(name)
        return [self.to_output(p) for p in paginate(matches, page, size)]

    def search_stores_by_province(
        self, name: str, page: int, size: int
    ) -> ProvinceStoresOutput:
        """
        Stores of the first province matching `name`, plus every whitelisted store.

        The whitelist half is global: it does not depend on the province found.
        Both lists are paginated independently with the same page/size.

        Raises:
            NotFoundError: If no active province matches.
        """
        province = self._repo.find_first_by_name(name)
        if province is None:
            raise NotFoundError("Province", search=name)

        province_stores = self._stores.find_active_by_province(province.id)
        whitelist_stores = self._whitelist.find_visible_stores()

        return ProvinceStoresOutput(
            province_stores=[
                StoreOutput.model_validate(s) for s in paginate(province_stores, page, size)
            ],
            whitelist_stores=[
                StoreOutput.model_validate(s) for s in paginate(whitelist_stores, page, size)
            ],
        )

    # =========================================================================
    # Hooks
    # =========================================================================

    def _validate_fields(self, data: ProvinceInput) -> None:
        require_text(data.name, "name")

    def _build(self, data: ProvinceInput) -> Province:
        return Province(
            name=data.name,
            is_active=data.is_active,
            is_deleted=data.is_deleted,
        )

    def _apply_update(self, entity: Province, data: ProvinceInput) -> None:
        entity.name = data.name
        entity.is_active = data.is_active
        entity.is_deleted = data.is_deleted
