"""
Province Repository - Data access for provinces.
"""

from typing import Sequence
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import Select, select

from rest_api.models import Province, Branch, Store
from .base import BaseRepository


def _contains(name: str) -> str:
    """ILIKE pattern for a literal substring match."""
    escaped = name.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ProvinceRepository(BaseRepository[Province]):
    """
    Repository for Province entities.

    Guarantees eager loading of:
    - branches -> stores -> whitelist_store
    """

    @property
    def model(self) -> type[Province]:
        return Province

    def _base_query(self) -> Select:
        """Base query with eager loading of the branch/store tree."""
        return select(Province).options(
            selectinload(Province.branches)
            .selectinload(Branch.stores)
            .selectinload(Store.whitelist_store)
        )

    def search_by_name(self, name: str) -> Sequence[Province]:
        """Active, non-deleted provinces whose name contains `name`, ignoring case."""
        query = (
            self._visible(self._base_query())
            .where(Province.name.ilike(_contains(name), escape="\\"))
            .order_by(Province.id)
        )
        return self._db.execute(query).scalars().unique().all()

    def find_first_by_name(self, name: str) -> Province | None:
        """Lowest-id match of search_by_name, or None."""
        query = (
            self._visible(self._base_query())
            .where(Province.name.ilike(_contains(name), escape="\\"))
            .order_by(Province.id)
            .limit(1)
        )
        return self._db.scalar(query)


def get_province_repository(db: Session) -> ProvinceRepository:
    """Factory function for ProvinceRepository."""
    return ProvinceRepository(db)
