"""
Shared module for cross-cutting concerns of the BuffetPOS backend.

STRUCTURE:
- pos_shared.security: Authentication, authorization, access codes
  - auth.py: staff JWT signing/verification, RoleGate
  - access_codes.py: access code minting and expiry
  - password.py: bcrypt hashing
  - rate_limit.py: per-app slowapi limiter and rate_limit() dependency

- pos_shared.infrastructure: Database and request plumbing
  - db.py: SQLAlchemy engine/sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and log filter

- pos_shared.config: Configuration
  - settings.py: Environment config (pydantic-settings)
  - logging.py: Structured logging
  - constants.py: Roles, TableStatus, header names

- pos_shared.utils: Utilities
  - exceptions.py: closed set of domain errors (ErrorKind)
  - schemas.py: Pydantic request/response schemas

IMPORT EXAMPLES:
    from pos_shared.security.auth import StaffTokenVerifier, RoleGate
    from pos_shared.infrastructure.db import get_db, safe_commit
    from pos_shared.config.settings import get_settings
    from pos_shared.config.constants import Roles, TableStatus
    from pos_shared.utils.exceptions import NotFoundError, AlreadyAssignedError
"""
