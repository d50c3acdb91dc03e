"""
Repository Pattern implementation.
Centralizes data access with guaranteed eager loading.

Usage:
    from rest_api.repositories import get_province_repository

    repo = get_province_repository(db)
    provinces = repo.find_active()
    province = repo.find_by_id(123)
"""

from .base import BaseRepository
from .province import ProvinceRepository, get_province_repository
from .branch import BranchRepository, get_branch_repository
from .store import StoreRepository, get_store_repository
from .whitelist_store import WhitelistStoreRepository, get_whitelist_store_repository
from .audit_log import AuditLogRepository, get_audit_log_repository

__all__ = [
    # Base
    "BaseRepository",
    # Province
    "ProvinceRepository",
    "get_province_repository",
    # Branch
    "BranchRepository",
    "get_branch_repository",
    # Store
    "StoreRepository",
    "get_store_repository",
    # WhitelistStore
    "WhitelistStoreRepository",
    "get_whitelist_store_repository",
    # AuditLog
    "AuditLogRepository",
    "get_audit_log_repository",
]
