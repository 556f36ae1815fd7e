"""
Access-code verification for customer routes.

A customer holds no account: the access code minted at assignment is the
session. Every rejection (empty, unknown, released, expired) raises the
same UnauthenticatedError so callers cannot tell the cases apart.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from pos_api.repositories import TableRepository
from pos_shared.config.logging import audit_auth_event, mask_code
from pos_shared.security.access_codes import is_access_code_expired
from pos_shared.utils.exceptions import UnauthenticatedError
from pos_shared.utils.schemas import TableDetail


@dataclass(frozen=True)
class CustomerSession:
    """The table bound to the presented access code, for one request."""

    table: TableDetail


class AccessCodeVerifier:
    """
    Resolves an access code to the Occupied table holding it. Read only.

    Usage:
        verifier = AccessCodeVerifier(db, settings.access_code_ttl_minutes)
        table = verifier.verify(code)
    """

    def __init__(self, db: Session, ttl_minutes: int = 0):
        self._repo = TableRepository(db)
        self._ttl_minutes = ttl_minutes

    def _reject(self, reason: str, code: str | None) -> UnauthenticatedError:
        audit_auth_event(
            "ACCESS_CODE_REJECTED",
            success=False,
            reason=reason,
            access_code=mask_code(code),
        )
        return UnauthenticatedError(reason=reason)

    def verify(self, code: str | None) -> TableDetail:
        """
        Raises:
            UnauthenticatedError: For any code that does not resolve to a
                currently Occupied table within the TTL.
        """
        if code is None or not code.strip():
            raise self._reject("missing access code", code)

        table = self._repo.find_occupied_by_code(code)
        if table is None:
            raise self._reject("unknown or released access code", code)

        if is_access_code_expired(table.assigned_at, self._ttl_minutes):
            raise self._reject("expired access code", code)

        return TableDetail.model_validate(table)
