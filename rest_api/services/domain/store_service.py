"""
Store Service.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from rest_api.models import Store
from rest_api.repositories import get_branch_repository, get_store_repository
from rest_api.services.base_service import (
    BaseCRUDService,
    require_ref,
    require_text,
    resolve_ref,
)
from shared.config.constants import AuditTable
from shared.utils.schemas import StoreInput, StoreOutput


class StoreService(BaseCRUDService[Store, StoreOutput]):
    """
    Service for store management.

    Business rules:
    - A store is created under an existing branch
    - Name and address must not be blank
    - Update re-parents only when a branch id is supplied
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=get_store_repository(db),
            output_schema=StoreOutput,
            entity_name="Store",
            table_name=AuditTable.STORES,
        )
        self._branches = get_branch_repository(db)

    def _validate_create(self, data: StoreInput) -> None:
        require_ref(data.branch, "Branch")
        super()._validate_create(data)

    def _validate_fields(self, data: StoreInput) -> None:
        require_text(data.name, "name")
        require_text(data.address, "address")

    def _build(self, data: StoreInput) -> Store:
        branch = resolve_ref(self._branches, data.branch.id, "Branch")
        return Store(
            name=data.name,
            address=data.address,
            is_active=data.is_active,
            is_deleted=data.is_deleted,
            branch=branch,
        )

    def _apply_update(self, entity: Store, data: StoreInput) -> None:
        entity.name = data.name
        entity.address = data.address
        entity.is_active = data.is_active
        entity.is_deleted = data.is_deleted
        if data.branch is not None and data.branch.id is not None:
            entity.branch = resolve_ref(self._branches, data.branch.id, "Branch")
