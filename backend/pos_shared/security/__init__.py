"""
Security: staff tokens, role gate, access codes, password hashing, rate limiting.
"""

from pos_shared.security.auth import (
    RoleGate,
    StaffIdentity,
    StaffTokenVerifier,
    get_bearer_token,
    sign_jwt,
)
from pos_shared.security.access_codes import (
    access_code_expires_at,
    generate_access_code,
    is_access_code_expired,
)
from pos_shared.security.password import hash_password, verify_password

__all__ = [
    "RoleGate",
    "StaffIdentity",
    "StaffTokenVerifier",
    "get_bearer_token",
    "sign_jwt",
    "access_code_expires_at",
    "generate_access_code",
    "is_access_code_expired",
    "hash_password",
    "verify_password",
]
