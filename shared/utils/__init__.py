"""
Utilities module: Exceptions, pagination.
"""

from shared.utils.exceptions import (
    AppException,
    AuthenticationError,
    NotFoundError,
    ValidationError,
    ConflictError,
)
from shared.utils.pagination import paginate

__all__ = [
    # exceptions
    "AppException",
    "AuthenticationError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    # pagination
    "paginate",
]
