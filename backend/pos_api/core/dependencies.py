"""
Request-scoped FastAPI dependencies.

Staff routes:    Authorization header -> StaffIdentity -> RoleGate
Customer routes: AccessCode header -> CustomerSession

Identity values are plain typed objects passed to handlers as parameters.
The verifier and gate are built once in create_app and read from app.state.
"""

from __future__ import annotations

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from pos_api.services.domain import AccessCodeVerifier, CustomerSession
from pos_shared.config.constants import ACCESS_CODE_HEADER, AUTHORIZATION_HEADER
from pos_shared.config.settings import Settings
from pos_shared.infrastructure.db import get_db
from pos_shared.security.auth import (
    RoleGate,
    StaffIdentity,
    StaffTokenVerifier,
    get_bearer_token,
)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def current_staff_identity(
    request: Request,
    authorization: str | None = Header(default=None, alias=AUTHORIZATION_HEADER),
) -> StaffIdentity:
    """
    Verify the bearer token. Always runs before any role check.

    Raises:
        UnauthenticatedError: Missing/malformed header or invalid token.
    """
    verifier: StaffTokenVerifier = request.app.state.staff_verifier
    token = get_bearer_token(authorization)
    return verifier.verify(token)


def require_staff_role(
    request: Request,
    identity: StaffIdentity = Depends(current_staff_identity),
) -> StaffIdentity:
    """
    Authenticated staff identity whose role is allowed on /manage.

    Raises:
        ForbiddenError: Role absent or outside the configured staff roles.
    """
    gate: RoleGate = request.app.state.staff_gate
    gate.authorize(identity)
    return identity


def current_customer_session(
    access_code: str | None = Header(default=None, alias=ACCESS_CODE_HEADER),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> CustomerSession:
    """
    Resolve the AccessCode header to the caller's table.

    Raises:
        UnauthenticatedError: Missing, unknown, released or expired code.
    """
    verifier = AccessCodeVerifier(db, settings.access_code_ttl_minutes)
    return CustomerSession(table=verifier.verify(access_code))
