"""
Branch Repository - Data access for branches.
"""

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import Select, select

from rest_api.models import Branch, Store
from .base import BaseRepository


class BranchRepository(BaseRepository[Branch]):
    """
    Repository for Branch entities.

    Guarantees eager loading of:
    - stores -> whitelist_store
    """

    @property
    def model(self) -> type[Branch]:
        return Branch

    def _base_query(self) -> Select:
        return select(Branch).options(
            selectinload(Branch.stores).selectinload(Store.whitelist_store)
        )


def get_branch_repository(db: Session) -> BranchRepository:
    """Factory function for BranchRepository."""
    return BranchRepository(db)
