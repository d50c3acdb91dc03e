"""
Audit log endpoints (read only).
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from rest_api.repositories import get_audit_log_repository
from rest_api.routers._common import (
    HANDLED_ERRORS,
    Pagination,
    failure,
    get_pagination,
    success,
)
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.pagination import paginate
from shared.utils.schemas import AuditLogOutput


router = APIRouter(prefix="/api/audit-logs", tags=["audit-logs"])


@router.get("")
def list_audit_logs(
    table_name: str | None = None,
    record_id: int | None = None,
    action: str | None = None,
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    """
    Get audit log entries with optional filters, newest first.

    Filters:
    - table_name: provinces, branches, stores or whitelist_stores
    - record_id: Filter by the id the row is keyed by
    - action: CREATE, UPDATE or DELETE
    """
    try:
        entries = get_audit_log_repository(db).find(table_name, record_id, action)
        page = [
            AuditLogOutput.model_validate(e)
            for e in paginate(entries, pagination.page, pagination.size)
        ]
    except HANDLED_ERRORS as e:
        return failure("Failed to fetch audit logs", e)
    return success("Audit logs fetched successfully", page)
