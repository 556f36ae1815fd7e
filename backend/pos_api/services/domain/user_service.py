"""
User Service - staff registration and login.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pos_api.repositories import UserRepository
from pos_shared.config.constants import Limits, Roles
from pos_shared.config.logging import audit_auth_event, auth_logger as logger, mask_email
from pos_shared.config.settings import Settings
from pos_shared.infrastructure.db import safe_commit
from pos_shared.security.auth import sign_jwt
from pos_shared.security.password import hash_password, password_fits, verify_password
from pos_shared.utils.exceptions import (
    DuplicateEmailError,
    UnauthenticatedError,
    ValidationError,
)
from pos_shared.utils.schemas import LoginResponse, UserInfo

INVALID_CREDENTIALS = "Invalid email or password"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """Service for staff accounts."""

    def __init__(self, db: Session, settings: Settings):
        self._db = db
        self._settings = settings
        self._repo = UserRepository(db)

    def create_user(self, name: str, email: str, password: str, role: str) -> UserInfo:
        """
        Create a staff account with any role.

        Public registration always passes Roles.EMPLOYEE; managers are
        created from the CLI.

        Raises:
            DuplicateEmailError: If the email is already registered.
        """
        if not role:
            raise ValidationError("Role is required", field="role")
        if not password_fits(password):
            raise ValidationError(
                f"Password must be at most {Limits.MAX_PASSWORD_BYTES} bytes", field="password"
            )

        email = normalize_email(email)
        if self._repo.email_taken(email):
            raise DuplicateEmailError(email=mask_email(email))

        try:
            user = self._repo.create(
                name=name,
                email=email,
                password_hash=hash_password(password, rounds=self._settings.bcrypt_rounds),
                role=role,
            )
            safe_commit(self._db)
        except IntegrityError:
            self._db.rollback()
            raise DuplicateEmailError(email=mask_email(email), race=True)

        audit_auth_event("REGISTER", user_id=str(user.id), email=email, role=role)
        return UserInfo(id=user.id, email=user.email, role=user.role, name=user.name)

    def register(self, name: str, email: str, password: str) -> UserInfo:
        return self.create_user(name, email, password, Roles.EMPLOYEE)

    def login(self, email: str, password: str, ip_address: str | None = None) -> LoginResponse:
        """
        Exchange credentials for a staff access token.

        Raises:
            UnauthenticatedError: Unknown email or wrong password (same message).
        """
        email = normalize_email(email)
        user = self._repo.find_by_email(email)

        if user is None:
            audit_auth_event(
                "LOGIN", email=email, success=False, reason="user not found", ip_address=ip_address
            )
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        if not verify_password(password, user.password):
            audit_auth_event(
                "LOGIN",
                user_id=str(user.id),
                email=email,
                success=False,
                reason="invalid password",
                ip_address=ip_address,
            )
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        token = sign_jwt(
            {"sub": str(user.id), "role": user.role, "email": user.email},
            self._settings,
        )
        audit_auth_event("LOGIN", user_id=str(user.id), email=email, ip_address=ip_address)
        logger.info("LOGIN_SUCCESS", email=mask_email(email), user_id=str(user.id), role=user.role)

        return LoginResponse(
            access_token=token,
            token_type="Bearer",
            expires_in=self._settings.jwt_access_token_expire_minutes * 60,
            user=UserInfo(id=user.id, email=user.email, role=user.role, name=user.name),
        )
