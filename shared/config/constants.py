"""
Centralized constants for the backend application.

Usage:
    from shared.config.constants import AuditAction, AuditTable, Limits

    log_change(db, table_name=AuditTable.STORES, action=AuditAction.CREATE, ...)
"""

from typing import Final


# =============================================================================
# Audit Log
# =============================================================================


class AuditAction:
    """Kinds of mutation recorded in the audit log."""

    CREATE: Final[str] = "CREATE"
    UPDATE: Final[str] = "UPDATE"
    DELETE: Final[str] = "DELETE"

    ALL: Final[list[str]] = [CREATE, UPDATE, DELETE]


class AuditTable:
    """Table names written to audit_log.table_name."""

    PROVINCES: Final[str] = "provinces"
    BRANCHES: Final[str] = "branches"
    STORES: Final[str] = "stores"
    WHITELIST_STORES: Final[str] = "whitelist_stores"


# =============================================================================
# Validation Limits
# =============================================================================


class Limits:
    """Validation limits."""

    # String lengths
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_ADDRESS_LENGTH: Final[int] = 500
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100

    # Pagination defaults (page is zero-based, size has no upper bound)
    DEFAULT_PAGE: Final[int] = 0
    DEFAULT_PAGE_SIZE: Final[int] = 50
