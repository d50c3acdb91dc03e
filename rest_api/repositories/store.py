"""
Store Repository - Data access for stores.
"""

from typing import Sequence
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import Select, select

from rest_api.models import Store, Branch
from .base import BaseRepository


class StoreRepository(BaseRepository[Store]):
    """
    Repository for Store entities.

    Guarantees eager loading of:
    - whitelist_store
    """

    @property
    def model(self) -> type[Store]:
        return Store

    def _base_query(self) -> Select:
        return select(Store).options(selectinload(Store.whitelist_store))

    def find_active_by_province(self, province_id: int) -> Sequence[Store]:
        """
        Active, non-deleted stores under every branch of a province.

        The branch's own flags are not consulted.
        """
        query = (
            self._visible(self._base_query())
            .join(Branch, Store.branch_id == Branch.id)
            .where(Branch.province_id == province_id)
            .order_by(Branch.id, Store.id)
        )
        return self._db.execute(query).scalars().unique().all()


def get_store_repository(db: Session) -> StoreRepository:
    """Factory function for StoreRepository."""
    return StoreRepository(db)
