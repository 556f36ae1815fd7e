"""
Domain errors for consistent error handling.

Every error carries an ErrorKind. The set of kinds is closed: the HTTP
boundary (pos_api.core.errors) maps each kind to a status code and refuses
to start if a kind has no mapping.

Usage:
    from pos_shared.utils.exceptions import NotFoundError, DuplicateNameError

    raise NotFoundError("Table", table_id)
    raise DuplicateNameError(name)
"""

from enum import Enum
from typing import Any

from pos_shared.config.logging import get_logger

logger = get_logger(__name__)


class ErrorKind(str, Enum):
    """Closed set of error kinds surfaced to clients."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_NAME = "DUPLICATE_NAME"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    ALREADY_ASSIGNED = "ALREADY_ASSIGNED"
    NOT_ASSIGNED = "NOT_ASSIGNED"
    TABLE_OCCUPIED = "TABLE_OCCUPIED"
    VALIDATION = "VALIDATION"
    RATE_LIMITED = "RATE_LIMITED"
    UNAVAILABLE = "UNAVAILABLE"
    INTERNAL = "INTERNAL"


class AppError(Exception):
    """
    Base error with automatic logging.

    `detail` is the client-facing message; `log_context` only goes to the log.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    default_detail: str = "Internal server error"
    log_level: str = "warning"
    headers: dict[str, str] | None = None

    def __init__(self, detail: str | None = None, **log_context: Any):
        self.detail = detail or self.default_detail
        self.log_context = log_context

        log_fn = getattr(logger, self.log_level, logger.warning)
        log_fn(self.detail, kind=self.kind.value, **log_context)

        super().__init__(self.detail)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(kind={self.kind.value}, detail={self.detail!r})>"


# =============================================================================
# Authentication / Authorization
# =============================================================================


class UnauthenticatedError(AppError):
    """
    Missing, malformed, invalid or expired credential or access code.

    The client always gets the same message; the actual reason is logged.
    """

    kind = ErrorKind.UNAUTHENTICATED
    default_detail = "Unauthorized"


class ForbiddenError(AppError):
    """Valid identity, insufficient role."""

    kind = ErrorKind.FORBIDDEN
    default_detail = "Forbidden"

    def __init__(self, required_roles: list[str] | None = None, **log_context: Any):
        super().__init__(required_roles=required_roles, **log_context)


# =============================================================================
# Business Errors
# =============================================================================


class NotFoundError(AppError):
    """
    Entity not found.

    Usage:
        raise NotFoundError("Table", table_id)
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, entity_id: Any = None, **log_context: Any):
        super().__init__(
            f"{entity} not found",
            entity=entity,
            entity_id=str(entity_id) if entity_id is not None else None,
            **log_context,
        )


class DuplicateNameError(AppError):
    """Table name collides with an existing table."""

    kind = ErrorKind.DUPLICATE_NAME
    default_detail = "Table name already exists"

    def __init__(self, name: str, **log_context: Any):
        super().__init__(name=name, **log_context)


class DuplicateEmailError(AppError):
    """Email already registered."""

    kind = ErrorKind.DUPLICATE_EMAIL
    default_detail = "Email already exists"


class AlreadyAssignedError(AppError):
    """
    Assign attempted on an occupied table.

    A conflict, not a transient fault: callers pick another table or wait
    for a release instead of retrying.
    """

    kind = ErrorKind.ALREADY_ASSIGNED
    default_detail = "Table already assigned"

    def __init__(self, table_id: Any, **log_context: Any):
        super().__init__(table_id=str(table_id), **log_context)


class NotAssignedError(AppError):
    """Release attempted on a free table."""

    kind = ErrorKind.NOT_ASSIGNED
    default_detail = "Table is not assigned"

    def __init__(self, table_id: Any, **log_context: Any):
        super().__init__(table_id=str(table_id), **log_context)


class TableOccupiedError(AppError):
    """Delete attempted on an occupied table."""

    kind = ErrorKind.TABLE_OCCUPIED
    default_detail = "Table is occupied"

    def __init__(self, table_id: Any, **log_context: Any):
        super().__init__(table_id=str(table_id), **log_context)


class ValidationError(AppError):
    """
    Input validation error.

    Usage:
        raise ValidationError("Capacity must be positive", field="capacity")
    """

    kind = ErrorKind.VALIDATION
    default_detail = "Invalid request"


class RateLimitedError(AppError):
    """Too many attempts from one client address on a limited endpoint."""

    kind = ErrorKind.RATE_LIMITED
    default_detail = "Too many requests"

    def __init__(self, retry_after: int, **log_context: Any):
        super().__init__(retry_after=retry_after, **log_context)
        self.headers = {"Retry-After": str(retry_after)}


# =============================================================================
# Infrastructure Errors
# =============================================================================


class UnavailableError(AppError):
    """The store timed out or is unreachable. Not retried by the server."""

    kind = ErrorKind.UNAVAILABLE
    default_detail = "Service temporarily unavailable"
    log_level = "error"


class InternalError(AppError):
    """Unexpected failure."""

    kind = ErrorKind.INTERNAL
    default_detail = "Internal server error"
    log_level = "error"
