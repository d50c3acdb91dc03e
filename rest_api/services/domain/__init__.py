"""
Domain Services - Application Layer.

Services contain business logic and orchestrate operations.
They use Repositories for data access and write the audit trail.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import ProvinceService

    # In router
    service = ProvinceService(db)
    provinces = service.list_all(page=0, size=50)
"""

from .province_service import ProvinceService
from .branch_service import BranchService
from .store_service import StoreService
from .whitelist_store_service import WhitelistStoreService

__all__ = [
    "ProvinceService",
    "BranchService",
    "StoreService",
    "WhitelistStoreService",
]
