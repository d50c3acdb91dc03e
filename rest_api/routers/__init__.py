"""
API routers, one per resource.
"""

from .provinces import router as provinces_router
from .branches import router as branches_router
from .stores import router as stores_router
from .whitelist_stores import router as whitelist_stores_router
from .audit_logs import router as audit_logs_router

__all__ = [
    "provinces_router",
    "branches_router",
    "stores_router",
    "whitelist_stores_router",
    "audit_logs_router",
]
