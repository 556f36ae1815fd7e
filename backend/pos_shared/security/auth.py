"""
Staff authentication and authorization.

- sign_jwt / StaffTokenVerifier: HS256 bearer tokens for staff.
- RoleGate: role check applied after a token has been verified.

Both receive the Settings object at construction; nothing here reads
process-wide state.
"""

from __future__ import annotations

import hashlib
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable

import jwt

from pos_shared.config.logging import audit_auth_event, get_logger
from pos_shared.config.settings import Settings
from pos_shared.utils.exceptions import ForbiddenError, UnauthenticatedError

logger = get_logger(__name__)

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"


def _hash_jti(jti: str | None) -> str:
    """Hash JTI for logging to avoid exposing token identifiers."""
    if not jti:
        return "<no-jti>"
    return hashlib.sha256(jti.encode()).hexdigest()[:8]


@dataclass(frozen=True)
class StaffIdentity:
    """
    Identity claims of a verified staff token.

    Lives for one request only and is passed to handlers by parameter.
    `role` is None when the token carries no role claim.
    """

    user_id: str
    role: str | None
    email: str | None
    expires_at: datetime


# =============================================================================
# JWT Functions (for staff authentication)
# =============================================================================


def sign_jwt(
    payload: dict[str, Any],
    settings: Settings,
    ttl_seconds: int | None = None,
) -> str:
    """
    Sign a staff access token with the given payload.

    Args:
        payload: Claims to include in the token (sub, role, email).
        settings: Application settings (secret, issuer, audience, expiry).
        ttl_seconds: Token lifetime in seconds. Defaults to the access token expiry.

    Returns:
        Signed JWT token string.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_access_token_expire_minutes * 60

    now = int(time.time())
    data = {
        **payload,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + ttl_seconds,
        "type": ACCESS_TOKEN_TYPE,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(data, settings.jwt_secret, algorithm=JWT_ALGORITHM)


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract bearer token from Authorization header.

    Raises:
        UnauthenticatedError: If header is missing or not "Bearer <token>".
    """
    if not authorization:
        raise UnauthenticatedError(reason="missing Authorization header")
    if not authorization.startswith("Bearer "):
        raise UnauthenticatedError(reason="Authorization header without Bearer prefix")
    token = authorization[len("Bearer "):].strip()
    if not token:
        raise UnauthenticatedError(reason="empty bearer token")
    return token


class StaffTokenVerifier:
    """
    Validates a staff bearer token and extracts identity claims.

    Usage:
        verifier = StaffTokenVerifier(settings)
        identity = verifier.verify(token)
    """

    def __init__(self, settings: Settings):
        self._secret = settings.jwt_secret
        self._issuer = settings.jwt_issuer
        self._audience = settings.jwt_audience

    def verify(self, token: str) -> StaffIdentity:
        """
        Verify signature, expiry, issuer and audience, then read the claims.

        Raises:
            UnauthenticatedError: For every failure. Expired and invalid
            tokens are indistinguishable to the caller.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            audit_auth_event("TOKEN_REJECTED", success=False, reason="expired")
            raise UnauthenticatedError(reason="token expired")
        except jwt.InvalidTokenError as e:
            audit_auth_event("TOKEN_REJECTED", success=False, reason=type(e).__name__)
            raise UnauthenticatedError(reason="invalid token", error=str(e))

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            raise UnauthenticatedError(reason="wrong token type", jti_hash=_hash_jti(payload.get("jti")))

        sub = payload.get("sub")
        if not isinstance(sub, str) or not sub:
            raise UnauthenticatedError(reason="malformed subject claim")

        role = payload.get("role")
        if role is not None and not isinstance(role, str):
            role = None

        return StaffIdentity(
            user_id=sub,
            role=role,
            email=payload.get("email"),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


class RoleGate:
    """
    Decides whether a verified staff identity may use a route group.

    Usage:
        gate = RoleGate(settings.staff_roles)
        gate.authorize(identity)
    """

    def __init__(self, allowed_roles: Iterable[str]):
        self._allowed = frozenset(allowed_roles)

    @property
    def allowed_roles(self) -> frozenset[str]:
        return self._allowed

    def is_allowed(self, identity: StaffIdentity) -> bool:
        return identity.role is not None and identity.role in self._allowed

    def authorize(self, identity: StaffIdentity) -> None:
        """
        Raises:
            ForbiddenError: If the identity has no role or a role outside the set.
        """
        if not self.is_allowed(identity):
            raise ForbiddenError(
                required_roles=sorted(self._allowed),
                user_id=identity.user_id,
                role=identity.role,
            )
