"""
Authentication utilities.
Handles the bearer JWT carried in the Authorization header of every API call.

The verified claims become the user context passed to services and written
to the audit log: {"sub": <user id>, "email": <user email>}.
"""

from __future__ import annotations

import hashlib
import time
import uuid
from typing import Any

import jwt
from fastapi import Header

from shared.config.settings import (
    JWT_SECRET,
    JWT_ISSUER,
    JWT_AUDIENCE,
    settings,
)
from shared.config.logging import auth_logger as logger, mask_email
from shared.utils.exceptions import AuthenticationError


def _hash_jti(jti: str) -> str:
    """Hash JTI for logging. Returns first 8 characters of SHA256 hash."""
    return hashlib.sha256(jti.encode()).hexdigest()[:8]


# =============================================================================
# JWT Functions
# =============================================================================


def sign_jwt(
    payload: dict[str, Any],
    ttl_seconds: int | None = None,
    token_type: str = "access",
) -> str:
    """
    Sign a JWT token with the given payload.

    Args:
        payload: Claims to include in the token (sub, email).
        ttl_seconds: Token lifetime in seconds. Defaults to access token expiry.
        token_type: Type of token.

    Returns:
        Signed JWT token string.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_access_token_expire_minutes * 60

    now = int(time.time())
    data = {
        **payload,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": now,
        "exp": now + ttl_seconds,
        "type": token_type,
        "jti": str(uuid.uuid4()),
    }
    token = jwt.encode(data, JWT_SECRET, algorithm="HS256")
    logger.debug(
        "Token issued",
        sub=payload.get("sub"),
        email=mask_email(payload.get("email")),
        jti=_hash_jti(data["jti"]),
    )
    return token


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Verify and decode a JWT token.

    Args:
        token: The JWT token string.

    Returns:
        Decoded token claims.

    Raises:
        AuthenticationError: If token is invalid, expired or lacks a subject.
    """
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=["HS256"],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError as e:
        # Client gets a generic message, the reason goes to the log
        raise AuthenticationError("Invalid token", reason=str(e))

    if "sub" not in payload:
        raise AuthenticationError("Invalid token: missing subject claim")

    try:
        int(payload["sub"])
    except (ValueError, TypeError):
        raise AuthenticationError("Invalid token: malformed subject claim")

    return payload


# =============================================================================
# FastAPI Dependencies
# =============================================================================


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract bearer token from Authorization header.

    Raises:
        AuthenticationError: If header is missing, blank or malformed.
    """
    if not authorization or not authorization.strip():
        raise AuthenticationError("Missing Authorization header")
    if not authorization.startswith("Bearer "):
        raise AuthenticationError(
            "Invalid Authorization header format. Expected: Bearer <token>"
        )
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise AuthenticationError("Missing bearer token")
    return token


def current_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """
    FastAPI dependency to get the current user context from JWT.

    Usage:
        @router.post("")
        def create_province(user: dict = Depends(current_user_context)):
            user_id = user["sub"]
            ...

    Returns:
        Dict with: sub (user id), email
    """
    token = get_bearer_token(authorization)
    payload = verify_jwt(token)
    return {"sub": int(payload["sub"]), "email": payload.get("email")}
