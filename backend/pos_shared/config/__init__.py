"""
Configuration module: Settings, logging, constants.
"""

from pos_shared.config.settings import Settings, get_settings
from pos_shared.config.logging import get_logger, setup_logging
from pos_shared.config.constants import (
    Roles,
    TableStatus,
    Limits,
    STAFF_ROLES,
)

__all__ = [
    # settings
    "Settings",
    "get_settings",
    # logging
    "get_logger",
    "setup_logging",
    # constants
    "Roles",
    "TableStatus",
    "Limits",
    "STAFF_ROLES",
]
