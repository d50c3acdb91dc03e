"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI

from rest_api.core.errors import register_exception_handlers
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers import (
    provinces_router,
    branches_router,
    stores_router,
    whitelist_stores_router,
    audit_logs_router,
)
from shared.config.settings import settings


# Create FastAPI application
app = FastAPI(
    title="Indostore REST API",
    description="Province, branch and store management API",
    version="0.1.0",
    lifespan=lifespan,
)

register_middlewares(app)
register_exception_handlers(app)


# =============================================================================
# Health Check
# =============================================================================


@app.get("/api/health")
def health_check():
    """Basic health check endpoint (no authentication)."""
    return {
        "status": "healthy",
        "service": "rest-api",
        "environment": settings.environment,
    }


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(provinces_router)
app.include_router(branches_router)
app.include_router(stores_router)
app.include_router(whitelist_stores_router)
app.include_router(audit_logs_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )
