"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class and AuditMixin
- province: Province, Branch
- store: Store, WhitelistStore
- audit: AuditLog
"""

# Base classes
from .base import Base, AuditMixin

# Store hierarchy
from .province import Province, Branch
from .store import Store, WhitelistStore

# Audit
from .audit import AuditLog

__all__ = [
    "Base",
    "AuditMixin",
    "Province",
    "Branch",
    "Store",
    "WhitelistStore",
    "AuditLog",
]
