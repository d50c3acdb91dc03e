"""
Store Models: Store and WhitelistStore.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import Limits

from .base import AuditMixin, Base, BigIntId

if TYPE_CHECKING:
    from .province import Branch


class Store(AuditMixin, Base):
    """
    A physical store; always belongs to exactly one Branch.
    Inherits: is_active, is_deleted, audit timestamps, *_by_id/email from AuditMixin.
    """

    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(Limits.MAX_NAME_LENGTH), nullable=False)
    address: Mapped[str] = mapped_column(String(Limits.MAX_ADDRESS_LENGTH), nullable=False)
    branch_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("branches.id"), nullable=False, index=True
    )

    # Relationships
    branch: Mapped["Branch"] = relationship(back_populates="stores")
    whitelist_store: Mapped[Optional["WhitelistStore"]] = relationship(
        back_populates="store", uselist=False
    )

    def __repr__(self) -> str:
        return f"<Store(id={self.id}, name='{self.name}', branch_id={self.branch_id})>"


class WhitelistStore(AuditMixin, Base):
    """
    Marks a Store as globally visible. At most one entry per store.
    Entries are hard-deleted; the inherited flags are kept for symmetry with
    the other tables and are never toggled by the service.
    """

    __tablename__ = "whitelist_stores"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    store_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("stores.id"), nullable=False
    )

    # Relationships
    store: Mapped["Store"] = relationship(back_populates="whitelist_store")

    __table_args__ = (
        UniqueConstraint("store_id", name="uq_whitelist_stores_store_id"),
    )

    def __repr__(self) -> str:
        return f"<WhitelistStore(id={self.id}, store_id={self.store_id})>"
