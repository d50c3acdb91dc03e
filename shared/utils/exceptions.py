"""
Centralized HTTP exceptions for consistent error handling.

Each class is one error kind; routers branch on the class, never on the message.

Usage:
    from shared.utils.exceptions import NotFoundError, ValidationError

    raise NotFoundError("Province", province_id)
    raise ValidationError("Province must be provided")
    raise ConflictError("Store is already whitelisted", store_id=store_id)
"""

from fastapi import HTTPException, status
from typing import Any

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 401 Unauthorized Errors
# =============================================================================


class AuthenticationError(AppException):
    """
    Missing or unusable credentials (401).

    Usage:
        raise AuthenticationError("Missing Authorization header")
    """

    def __init__(self, detail: str = "Unauthorized", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            log_level="warning",
            headers={"WWW-Authenticate": "Bearer"},
            **log_context,
        )


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    The id goes to the log line only; the message stays "<Entity> not found".

    Usage:
        raise NotFoundError("Province", 123)
        raise NotFoundError("Branch", branch_id, store_id=store_id)
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{entity} not found",
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("Branch must be provided")
        raise ValidationError("Name must not be blank", field="name")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class MissingReferenceError(ValidationError):
    """A required parent reference (or its id) was not supplied."""

    def __init__(self, entity: str, **log_context: Any):
        super().__init__(f"{entity} must be provided", entity=entity, **log_context)


class BlankFieldError(ValidationError):
    """A required text field is missing or whitespace only."""

    def __init__(self, field: str, **log_context: Any):
        super().__init__(
            f"{field.capitalize()} must not be blank", field=field, **log_context
        )


# =============================================================================
# 409 Conflict Errors
# =============================================================================


class ConflictError(AppException):
    """
    Resource conflict error (409).

    Usage:
        raise ConflictError("Store is already whitelisted", store_id=12)
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class AlreadyWhitelistedError(ConflictError):
    """The store already has a whitelist entry."""

    def __init__(self, store_id: int | None = None, **log_context: Any):
        super().__init__("Store is already whitelisted", store_id=store_id, **log_context)
