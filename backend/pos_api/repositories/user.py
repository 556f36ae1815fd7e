"""
User Repository.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from pos_api.models import User

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Data access for staff users."""

    @property
    def model(self) -> type[User]:
        return User

    def find_by_email(self, email: str) -> User | None:
        return self._db.scalar(select(User).where(User.email == email))

    def email_taken(self, email: str) -> bool:
        return self._db.scalar(select(User.id).where(User.email == email).limit(1)) is not None

    def create(self, name: str, email: str, password_hash: str, role: str) -> User:
        return self.save(User(name=name, email=email, password=password_hash, role=role))


def get_user_repository(db: Session) -> UserRepository:
    return UserRepository(db)
