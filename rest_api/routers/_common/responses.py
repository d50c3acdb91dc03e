"""
Response envelopes shared by every router.

Success: {"message": ..., "data": ...}   ("data" omitted when there is none)
Failure: {"message": ..., "error": ...}
"""

from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from shared.config.logging import rest_api_logger as logger
from shared.utils.exceptions import AppException

# Failures a router turns into an error envelope instead of a 500
HANDLED_ERRORS = (AppException, SQLAlchemyError)


def success(message: str, data: Any = None, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Build a success envelope."""
    content: dict[str, Any] = {"message": message}
    if data is not None:
        content["data"] = jsonable_encoder(data, by_alias=True)
    return JSONResponse(status_code=status_code, content=content)


def failure(
    message: str,
    exc: Exception,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> JSONResponse:
    """
    Build a failure envelope.

    The error text is the domain error's detail; database errors fall back to
    the driver message.
    """
    if isinstance(exc, AppException):
        error = str(exc.detail)
    else:
        logger.error(message, error=str(exc), exc_info=True)
        error = str(exc)
    return JSONResponse(status_code=status_code, content={"message": message, "error": error})
