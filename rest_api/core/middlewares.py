"""
HTTP middleware stack: CORS, request correlation, JSON-only bodies and
security headers.
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from shared.config.settings import settings
from shared.infrastructure.correlation import REQUEST_ID_HEADER, CorrelationIdMiddleware

# Front-end dev servers allowed when ALLOWED_ORIGINS is empty
DEV_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds the fixed security headers of a JSON-only API (plus HSTS in production)."""

    HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    }
    HSTS = "max-age=31536000; includeSubDomains"

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        response = await call_next(request)
        response.headers.update(self.HEADERS)
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = self.HSTS
        return response


class ContentTypeValidationMiddleware(BaseHTTPMiddleware):
    """Rejects POST/PUT/PATCH bodies declared as anything but JSON with 415."""

    METHODS_WITH_BODY = frozenset({"POST", "PUT", "PATCH"})

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        content_type = request.headers.get("content-type", "")
        if (
            request.method in self.METHODS_WITH_BODY
            and content_type
            and not content_type.startswith("application/json")
        ):
            return JSONResponse(
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                content={"message": "Unsupported Media Type", "error": "Use application/json"},
            )
        return await call_next(request)


def cors_origins() -> list[str]:
    """Configured origins, or the localhost dev servers when none are set."""
    return settings.cors_origin_list or DEV_CORS_ORIGINS


def register_middlewares(app: FastAPI) -> None:
    """
    Install the middleware stack. The last one added runs first, so requests
    pass CORS, then correlation, then the content-type check.
    """
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(ContentTypeValidationMiddleware)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
        max_age=0 if settings.environment == "development" else 600,
    )
