"""
Rate limiting using slowapi.

Protects the public login and access-code endpoints from brute force.

Every app builds its own Limiter from its Settings (create_limiter) and keeps
it on app.state.limiter. Limits are enforced by a route dependency rather
than the slowapi decorator: route dependencies resolve before the
credential / access-code dependencies, so rejected guesses are counted too.

Usage:
    @router.get("/tables", dependencies=[Depends(rate_limit("customer", ACCESS_CODE_RATE_LIMIT))])
"""

from collections.abc import Callable

from fastapi import Request
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from pos_shared.config.settings import Settings
from pos_shared.utils.exceptions import RateLimitedError

LOGIN_RATE_LIMIT = "5/minute"
ACCESS_CODE_RATE_LIMIT = "30/minute"


def create_limiter(settings: Settings) -> Limiter:
    """In-memory limiter keyed by client IP, switched by rate_limit_enabled."""
    return Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit(scope: str, limit: str) -> Callable[[Request], None]:
    """
    Build a dependency that counts one hit per request for (scope, client IP).

    Raises:
        RateLimitedError: The client exceeded `limit` on this scope.
    """
    item = parse(limit)

    def enforce(request: Request) -> None:
        limiter: Limiter = request.app.state.limiter
        if not limiter.enabled:
            return

        client = get_remote_address(request)
        if not limiter.limiter.hit(item, scope, client):
            raise RateLimitedError(
                retry_after=item.get_expiry(),
                scope=scope,
                limit=limit,
                path=request.url.path,
                ip_address=client,
            )

    return enforce
