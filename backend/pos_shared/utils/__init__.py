"""
Shared utilities: domain errors and Pydantic schemas.
"""

from pos_shared.utils.exceptions import (
    AppError,
    ErrorKind,
    UnauthenticatedError,
    ForbiddenError,
    NotFoundError,
    DuplicateNameError,
    DuplicateEmailError,
    AlreadyAssignedError,
    NotAssignedError,
    TableOccupiedError,
    ValidationError,
    RateLimitedError,
    UnavailableError,
    InternalError,
)

__all__ = [
    "AppError",
    "ErrorKind",
    "UnauthenticatedError",
    "ForbiddenError",
    "NotFoundError",
    "DuplicateNameError",
    "DuplicateEmailError",
    "AlreadyAssignedError",
    "NotAssignedError",
    "TableOccupiedError",
    "ValidationError",
    "RateLimitedError",
    "UnavailableError",
    "InternalError",
]
