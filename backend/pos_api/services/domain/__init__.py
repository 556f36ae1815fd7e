"""
Domain Services.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from pos_api.services.domain import AssignmentService

    service = AssignmentService(db, settings)
    table = service.assign(table_id, user_id=identity.user_id)
"""

from .table_state import TableTransition, can_transition, check_transition
from .table_service import TableService
from .assignment_service import AssignmentService
from .access_code_service import AccessCodeVerifier, CustomerSession
from .user_service import UserService

__all__ = [
    "TableTransition",
    "can_transition",
    "check_transition",
    "TableService",
    "AssignmentService",
    "AccessCodeVerifier",
    "CustomerSession",
    "UserService",
]
