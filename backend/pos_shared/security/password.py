"""
Password hashing utilities using bcrypt.

bcrypt only accepts up to 72 bytes of input (recent releases raise instead of
truncating), so the limit is checked on the UTF-8 encoding, not on characters.
"""

import bcrypt

from pos_shared.config.constants import Limits
from pos_shared.config.logging import get_logger

logger = get_logger(__name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def password_fits(password: str) -> bool:
    """True if bcrypt can take the password as is."""
    return len(password.encode("utf-8")) <= Limits.MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int = 12) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash.
        rounds: bcrypt cost factor.

    Returns:
        Hashed password string (includes salt and algorithm info).

    Raises:
        ValueError: The password is longer than 72 bytes once encoded.
    """
    if not password_fits(password):
        raise ValueError(f"Password must be at most {Limits.MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its bcrypt hash.

    Non-bcrypt stored values and passwords bcrypt cannot take never verify.
    """
    if not hashed_password.startswith(BCRYPT_PREFIXES):
        logger.warning("SECURITY: Stored password is not a bcrypt hash")
        return False

    if not password_fits(plain_password):
        return False

    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
