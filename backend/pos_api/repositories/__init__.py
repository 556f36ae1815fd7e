"""
Repository Pattern implementation.
Centralizes data access, including the conditional status updates.

Usage:
    from pos_api.repositories import get_table_repository

    repo = get_table_repository(db)
    table = repo.find_by_id(table_id)
"""

from .base import BaseRepository
from .table import TableRepository, get_table_repository
from .user import UserRepository, get_user_repository

__all__ = [
    "BaseRepository",
    "TableRepository",
    "get_table_repository",
    "UserRepository",
    "get_user_repository",
]
