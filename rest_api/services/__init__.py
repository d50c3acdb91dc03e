"""
Services module for business logic.

- domain/: Application services (business logic), one per entity
- base_service.py: Shared CRUD flow with audit and transactions
- audit.py: Audit log writer

Usage:
    from rest_api.services.domain import ProvinceService
    service = ProvinceService(db)
    province = service.get(province_id)
"""

from .audit import log_change, log_create, log_update, log_delete, serialize_model
from .domain import (
    ProvinceService,
    BranchService,
    StoreService,
    WhitelistStoreService,
)

__all__ = [
    # Audit
    "log_change",
    "log_create",
    "log_update",
    "log_delete",
    "serialize_model",
    # Domain services
    "ProvinceService",
    "BranchService",
    "StoreService",
    "WhitelistStoreService",
]
