"""
CORS (Cross-Origin Resource Sharing) configuration.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pos_shared.config.constants import ACCESS_CODE_HEADER, AUTHORIZATION_HEADER, REQUEST_ID_HEADER
from pos_shared.config.settings import Settings


# Default origins for development (staff dashboard and customer app)
DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3001",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:3001",
]

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]

ALLOWED_HEADERS = [
    AUTHORIZATION_HEADER,
    ACCESS_CODE_HEADER,
    REQUEST_ID_HEADER,
    "Content-Type",
    "Accept",
]


def get_cors_origins(settings: Settings) -> list[str]:
    """
    ALLOWED_ORIGINS (comma-separated) when set, else the development defaults.
    """
    if settings.allowed_origins:
        return [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
    return DEFAULT_CORS_ORIGINS


def configure_cors(app: FastAPI, settings: Settings) -> None:
    # Short preflight cache in development
    max_age = 0 if settings.environment == "development" else 600

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(settings),
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        expose_headers=[REQUEST_ID_HEADER],
        max_age=max_age,
    )
