"""
Application lifespan handler.
Manages startup and shutdown events for the FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from pos_api.models import Base
from pos_shared.config.logging import setup_logging, rest_api_logger as logger
from pos_shared.config.settings import Settings
from pos_shared.infrastructure.db import get_engine


def check_configuration(settings: Settings) -> None:
    """
    Refuse to start with insecure configuration in production.

    Raises:
        RuntimeError: In production, if any secret check fails.
    """
    secret_errors = settings.validate_production_secrets()
    if not secret_errors:
        return

    for error in secret_errors:
        logger.error("Configuration error: %s", error)
    if settings.environment == "production":
        raise RuntimeError(
            f"Production configuration errors: {'; '.join(secret_errors)}. "
            "Server will not start with insecure configuration."
        )
    logger.warning("Running with insecure defaults (acceptable for development only)")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    settings: Settings = app.state.settings

    setup_logging(settings)
    check_configuration(settings)

    logger.info("Starting REST API", port=settings.rest_api_port, env=settings.environment)

    Base.metadata.create_all(bind=get_engine(settings.database_url))
    logger.info("Database tables created/verified")

    yield

    logger.info("Shutting down REST API")
