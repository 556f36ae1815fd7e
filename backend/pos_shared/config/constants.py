"""
Centralized constants for the backend application.
Avoid magic strings for roles, table states and header names.

Usage:
    from pos_shared.config.constants import Roles, TableStatus

    if identity.role in STAFF_ROLES:
        ...

    if table.status == TableStatus.OCCUPIED:
        ...
"""

from enum import Enum
from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """
    Staff role constants.

    Roles are stored as plain text on users and in tokens, so the set is open:
    a token may carry a role that is not listed here and is then refused by
    the role gate.
    """

    EMPLOYEE: Final[str] = "Employee"
    MANAGER: Final[str] = "Manager"

    ALL: Final[list[str]] = [EMPLOYEE, MANAGER]


STAFF_ROLES: Final[frozenset[str]] = frozenset({Roles.EMPLOYEE, Roles.MANAGER})


# =============================================================================
# Table State
# =============================================================================


class TableStatus(str, Enum):
    """Occupancy state of a table."""

    FREE = "Free"
    OCCUPIED = "Occupied"


# =============================================================================
# Headers
# =============================================================================


AUTHORIZATION_HEADER: Final[str] = "Authorization"
ACCESS_CODE_HEADER: Final[str] = "AccessCode"
REQUEST_ID_HEADER: Final[str] = "X-Request-ID"


# =============================================================================
# Limits
# =============================================================================


class Limits:
    """Input size limits."""

    MAX_TABLE_NAME_LENGTH: Final[int] = 100
    MAX_TABLE_CAPACITY: Final[int] = 100
    MAX_NAME_LENGTH: Final[int] = 100
    MIN_PASSWORD_LENGTH: Final[int] = 8
    MAX_PASSWORD_BYTES: Final[int] = 72  # bcrypt input limit, UTF-8 encoded
