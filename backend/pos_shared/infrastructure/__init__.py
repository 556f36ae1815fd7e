"""
Infrastructure: database sessions and request correlation.
"""

from pos_shared.infrastructure.db import (
    SessionLocal,
    create_db_engine,
    get_db,
    get_db_context,
    get_engine,
    safe_commit,
)
from pos_shared.infrastructure.correlation import (
    CorrelationIdFilter,
    CorrelationIdMiddleware,
    RequestContext,
    current_request_context,
    get_request_id,
)

__all__ = [
    "SessionLocal",
    "create_db_engine",
    "get_db",
    "get_db_context",
    "get_engine",
    "safe_commit",
    "CorrelationIdFilter",
    "CorrelationIdMiddleware",
    "RequestContext",
    "current_request_context",
    "get_request_id",
]
