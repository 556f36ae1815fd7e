"""
Table access codes.

An access code is minted when a table is assigned and is the only credential
a customer holds. It must be unguessable for the whole occupancy window, so
it comes from the `secrets` CSPRNG.
"""

import secrets
from datetime import datetime, timedelta, timezone


def generate_access_code(nbytes: int = 16) -> str:
    """Return a fresh url-safe access code with `nbytes` bytes of entropy."""
    return secrets.token_urlsafe(nbytes)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (SQLite drops tzinfo) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def access_code_expires_at(assigned_at: datetime | None, ttl_minutes: int) -> datetime | None:
    """Expiry of a code assigned at `assigned_at`; None when codes never expire."""
    if ttl_minutes <= 0 or assigned_at is None:
        return None
    return as_utc(assigned_at) + timedelta(minutes=ttl_minutes)


def is_access_code_expired(
    assigned_at: datetime | None,
    ttl_minutes: int,
    now: datetime | None = None,
) -> bool:
    expires_at = access_code_expires_at(assigned_at, ttl_minutes)
    if expires_at is None:
        return False
    now = now or datetime.now(timezone.utc)
    return as_utc(now) >= expires_at
