"""
WhitelistStore Repository - Data access for whitelist entries.
"""

from typing import Sequence
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import Select, select, delete

from rest_api.models import WhitelistStore, Store
from .base import BaseRepository


class WhitelistStoreRepository(BaseRepository[WhitelistStore]):
    """
    Repository for WhitelistStore entities.

    Guarantees eager loading of:
    - store
    """

    @property
    def model(self) -> type[WhitelistStore]:
        return WhitelistStore

    def _base_query(self) -> Select:
        return select(WhitelistStore).options(joinedload(WhitelistStore.store))

    def find_all(self) -> Sequence[WhitelistStore]:
        """Every entry, ordered by id, regardless of flags."""
        query = self._base_query().order_by(WhitelistStore.id)
        return self._db.execute(query).scalars().unique().all()

    def find_visible_stores(self) -> list[Store]:
        """Active, non-deleted stores referenced by any entry, in entry order."""
        return [entry.store for entry in self.find_all() if entry.store.is_visible]

    def exists_for_store(self, store_id: int, exclude_id: int | None = None) -> bool:
        """Whether some entry (other than `exclude_id`) already points at the store."""
        query = select(WhitelistStore.id).where(WhitelistStore.store_id == store_id)
        if exclude_id is not None:
            query = query.where(WhitelistStore.id != exclude_id)
        return self._db.scalar(query.limit(1)) is not None

    def delete_by_id(self, entity_id: int) -> int:
        """
        Hard delete by id with a bulk DELETE, no entity is loaded.

        Returns:
            Number of rows removed (0 when the id does not exist)
        """
        result = self._db.execute(
            delete(WhitelistStore)
            .where(WhitelistStore.id == entity_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0


def get_whitelist_store_repository(db: Session) -> WhitelistStoreRepository:
    """Factory function for WhitelistStoreRepository."""
    return WhitelistStoreRepository(db)
