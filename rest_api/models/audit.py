"""
Audit Log Model.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, BigIntId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditLog(Base):
    """
    Records every mutation of a hierarchy entity.
    Stores who did what, when, and the before/after state.
    Rows are append-only: nothing updates or deletes them.
    """

    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)

    # What was changed
    table_name: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    record_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    action: Mapped[str] = mapped_column(String(16), nullable=False)  # CREATE, UPDATE, DELETE

    # Change details (JSON snapshots)
    old_value: Mapped[Optional[str]] = mapped_column(Text)
    new_value: Mapped[Optional[str]] = mapped_column(Text)

    # Who made the change
    user_id: Mapped[Optional[int]] = mapped_column(BigInteger, index=True)
    user_email: Mapped[Optional[str]] = mapped_column(String(255))

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_audit_log_table_record", "table_name", "record_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<AuditLog(id={self.id}, table='{self.table_name}', "
            f"record_id={self.record_id}, action='{self.action}')>"
        )
