"""
Authentication router.
Handles staff registration, login and the current identity.
"""

from fastapi import APIRouter, Depends, Request
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from pos_api.core.dependencies import current_staff_identity, get_app_settings
from pos_api.services.domain import UserService
from pos_shared.config.settings import Settings
from pos_shared.infrastructure.db import get_db
from pos_shared.security.auth import StaffIdentity
from pos_shared.security.rate_limit import LOGIN_RATE_LIMIT, rate_limit
from pos_shared.utils.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
)


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=MessageResponse)
def register(
    body: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    """
    Register a staff account. Public registration always creates an Employee.
    """
    UserService(db, settings).register(body.name, body.email, body.password)
    return MessageResponse(message="User registered successfully")


@router.post(
    "/login",
    response_model=LoginResponse,
    dependencies=[Depends(rate_limit("login", LOGIN_RATE_LIMIT))],
)
def login(
    request: Request,
    body: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> LoginResponse:
    """
    Authenticate a staff member and return a bearer token.

    The token contains:
    - sub: user ID
    - role: Employee or Manager
    - email: user's email
    """
    return UserService(db, settings).login(
        body.email, body.password, ip_address=get_remote_address(request)
    )


@router.get("/me")
def me(identity: StaffIdentity = Depends(current_staff_identity)) -> dict:
    """Claims of the caller's token."""
    return {
        "user_id": identity.user_id,
        "email": identity.email,
        "role": identity.role,
        "expires_at": identity.expires_at.isoformat(),
    }
