"""
Geography Models: Province and Branch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import Limits

from .base import AuditMixin, Base, BigIntId

if TYPE_CHECKING:
    from .store import Store


class Province(AuditMixin, Base):
    """
    Top level of the store hierarchy.
    Inherits: is_active, is_deleted, audit timestamps, *_by_id/email from AuditMixin.
    """

    __tablename__ = "provinces"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(Limits.MAX_NAME_LENGTH), nullable=False, index=True)

    # Relationships
    branches: Mapped[list["Branch"]] = relationship(
        back_populates="province", order_by="Branch.id"
    )

    def __repr__(self) -> str:
        return f"<Province(id={self.id}, name='{self.name}')>"


class Branch(AuditMixin, Base):
    """
    A regional branch; always belongs to exactly one Province.
    Inherits: is_active, is_deleted, audit timestamps, *_by_id/email from AuditMixin.
    """

    __tablename__ = "branches"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(Limits.MAX_NAME_LENGTH), nullable=False)
    province_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("provinces.id"), nullable=False, index=True
    )

    # Relationships
    province: Mapped["Province"] = relationship(back_populates="branches")
    stores: Mapped[list["Store"]] = relationship(
        back_populates="branch", order_by="Store.id"
    )

    def __repr__(self) -> str:
        return f"<Branch(id={self.id}, name='{self.name}', province_id={self.province_id})>"
