"""
Branch Service.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from rest_api.models import Branch
from rest_api.repositories import get_branch_repository, get_province_repository
from rest_api.services.base_service import (
    BaseCRUDService,
    require_ref,
    require_text,
    resolve_ref,
)
from shared.config.constants import AuditTable
from shared.utils.schemas import BranchInput, BranchOutput


class BranchService(BaseCRUDService[Branch, BranchOutput]):
    """
    Service for branch management.

    Business rules:
    - A branch is created under an existing province
    - Update re-parents only when a province id is supplied
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=get_branch_repository(db),
            output_schema=BranchOutput,
            entity_name="Branch",
            table_name=AuditTable.BRANCHES,
        )
        self._provinces = get_province_repository(db)

    def _validate_create(self, data: BranchInput) -> None:
        require_ref(data.province, "Province")
        super()._validate_create(data)

    def _validate_fields(self, data: BranchInput) -> None:
        require_text(data.name, "name")

    def _build(self, data: BranchInput) -> Branch:
        province = resolve_ref(self._provinces, data.province.id, "Province")
        return Branch(
            name=data.name,
            is_active=data.is_active,
            is_deleted=data.is_deleted,
            province=province,
        )

    def _apply_update(self, entity: Branch, data: BranchInput) -> None:
        entity.name = data.name
        entity.is_active = data.is_active
        entity.is_deleted = data.is_deleted
        if data.province is not None and data.province.id is not None:
            entity.province = resolve_ref(self._provinces, data.province.id, "Province")
