"""
Application lifespan: configure logging, refuse unsafe production settings,
make sure the schema exists, and release the pool on shutdown.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from rest_api.models import Base
from shared.config.logging import setup_logging, rest_api_logger as logger
from shared.config.settings import settings
from shared.infrastructure.db import engine


def check_configuration() -> None:
    """
    Raise in production when the settings are unsafe; warn elsewhere.

    Raises:
        RuntimeError: If running in production with any configuration problem.
    """
    problems = settings.validate_production_secrets()
    if not problems:
        return
    if settings.is_production:
        for problem in problems:
            logger.critical("Unsafe production configuration", problem=problem)
        raise RuntimeError("Refusing to start: " + "; ".join(problems))
    logger.warning(
        "Configuration not fit for production",
        environment=settings.environment,
        problems=len(problems),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    check_configuration()

    Base.metadata.create_all(bind=engine)
    logger.info(
        "REST API started",
        environment=settings.environment,
        port=settings.rest_api_port,
        tables=len(Base.metadata.tables),
    )
    try:
        yield
    finally:
        engine.dispose()
        logger.info("REST API stopped")
