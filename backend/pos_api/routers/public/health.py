"""
Liveness and health check endpoints.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pos_api.core.dependencies import get_app_settings
from pos_shared.config.logging import rest_api_logger as logger
from pos_shared.config.settings import Settings
from pos_shared.infrastructure.db import get_db


router = APIRouter(tags=["health"])

SERVICE_NAME = "buffet-pos"


@router.get("/", response_class=PlainTextResponse)
def root():
    return "BuffetPOS is running 🎉"


@router.get("/health")
def health_check(settings: Settings = Depends(get_app_settings)):
    """
    Basic health check endpoint.
    Returns service status without checking dependencies.
    """
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "environment": settings.environment,
    }


@router.get("/health/detailed")
def detailed_health_check(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Health check including database connectivity.
    Returns 503 if the database is unreachable.
    """
    checks = {
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "dependencies": {},
    }

    try:
        db.execute(text("SELECT 1"))
        checks["dependencies"]["database"] = {"status": "healthy"}
        checks["status"] = "healthy"
    except SQLAlchemyError as e:
        logger.error("Database health check failed", error=str(e))
        checks["dependencies"]["database"] = {"status": "unhealthy", "error": type(e).__name__}
        checks["status"] = "degraded"
        return JSONResponse(content=checks, status_code=503)

    return checks
