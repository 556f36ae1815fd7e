"""
User Model.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from pos_shared.config.constants import Roles

from .base import AuditMixin, Base


class User(AuditMixin, Base):
    """
    Staff member (Employee or Manager).

    `role` is plain text so new roles can be introduced without a migration.
    """

    __tablename__ = "app_user"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)  # bcrypt hash
    role: Mapped[str] = mapped_column(Text, nullable=False, default=Roles.EMPLOYEE)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role={self.role})>"
