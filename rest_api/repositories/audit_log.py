"""
AuditLog Repository - Read access to the audit trail.
"""

from typing import Sequence
from sqlalchemy.orm import Session
from sqlalchemy import select

from rest_api.models import AuditLog


class AuditLogRepository:
    """
    Repository for AuditLog rows.

    Audit rows carry no status flags, so this does not extend BaseRepository.
    """

    def __init__(self, db: Session):
        self._db = db

    def find(
        self,
        table_name: str | None = None,
        record_id: int | None = None,
        action: str | None = None,
    ) -> Sequence[AuditLog]:
        """Matching rows, newest first."""
        query = select(AuditLog)
        if table_name:
            query = query.where(AuditLog.table_name == table_name)
        if record_id is not None:
            query = query.where(AuditLog.record_id == record_id)
        if action:
            query = query.where(AuditLog.action == action.upper())
        query = query.order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
        return self._db.execute(query).scalars().all()


def get_audit_log_repository(db: Session) -> AuditLogRepository:
    """Factory function for AuditLogRepository."""
    return AuditLogRepository(db)
