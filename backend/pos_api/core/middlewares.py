"""
Security middlewares for the FastAPI application.
"""

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from pos_shared.config.settings import Settings
from pos_shared.infrastructure.correlation import CorrelationIdMiddleware


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add security headers to all responses.

    Headers added:
    - X-Content-Type-Options: nosniff
    - X-Frame-Options: DENY
    - Referrer-Policy: strict-origin-when-cross-origin
    - Cache-Control: no-store (responses may carry access codes and tokens)
    - Strict-Transport-Security: production only
    """

    def __init__(self, app, environment: str = "development"):
        super().__init__(app)
        self._environment = environment

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store"
        if "server" in response.headers:
            del response.headers["server"]

        if self._environment == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response


def register_middlewares(app: FastAPI, settings: Settings) -> None:
    """
    Middlewares run in reverse order of registration:
    CorrelationId first, so every later log line carries the request id.
    """
    app.add_middleware(SecurityHeadersMiddleware, environment=settings.environment)
    app.add_middleware(CorrelationIdMiddleware)
