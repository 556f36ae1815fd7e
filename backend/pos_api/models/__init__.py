"""
SQLAlchemy ORM Models Package.

- base: Base class and AuditMixin
- table: Table
- user: User
"""

from .base import Base, AuditMixin
from .table import Table
from .user import User

__all__ = [
    "Base",
    "AuditMixin",
    "Table",
    "User",
]
