"""
Common utilities shared across routers.
"""

from .pagination import Pagination, get_pagination
from .responses import HANDLED_ERRORS, success, failure

__all__ = [
    # Pagination
    "Pagination",
    "get_pagination",
    # Envelopes
    "HANDLED_ERRORS",
    "success",
    "failure",
]
