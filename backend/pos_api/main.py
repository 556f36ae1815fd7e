"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI

from pos_api.core.cors import configure_cors
from pos_api.core.errors import register_exception_handlers
from pos_api.core.lifespan import lifespan
from pos_api.core.middlewares import register_middlewares
from pos_api.routers.auth import router as auth_router
from pos_api.routers.customer import router as customer_router
from pos_api.routers.manage import router as manage_router
from pos_api.routers.public import health_router
from pos_shared.config.settings import Settings, get_settings
from pos_shared.security.auth import RoleGate, StaffTokenVerifier
from pos_shared.security.rate_limit import create_limiter


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application around one immutable Settings object.

    The staff token verifier, role gate and rate limiter are constructed
    here, once per app, and shared by every request through app.state.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="BuffetPOS REST API",
        description="Buffet point-of-sale API: tables, staff and customer access",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.staff_verifier = StaffTokenVerifier(settings)
    app.state.staff_gate = RoleGate(settings.staff_roles)
    app.state.limiter = create_limiter(settings)

    register_exception_handlers(app)
    configure_cors(app, settings)
    register_middlewares(app, settings)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(manage_router)
    app.include_router(customer_router)

    return app


app = create_app()


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pos_api.main:app",
        host="0.0.0.0",
        port=get_settings().rest_api_port,
        reload=True,
    )
