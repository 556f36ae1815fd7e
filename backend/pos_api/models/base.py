"""
Base class and AuditMixin for all SQLAlchemy ORM models.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class AuditMixin:
    """
    Mixin providing audit trail fields.

    Fields added:
    - created_at, updated_at: Audit timestamps
    - created_by_id, updated_by_id: Staff user who made the change
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), nullable=True
    )

    # Stored as text: the id comes from the token subject
    created_by_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    updated_by_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    def set_created_by(self, user_id: str | None) -> None:
        """Set created_by fields on new entity."""
        self.created_by_id = user_id

    def set_updated_by(self, user_id: str | None) -> None:
        """Set updated_by fields on entity update."""
        self.updated_by_id = user_id
        self.updated_at = datetime.now(timezone.utc)

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        id_val = getattr(self, "id", None)
        return f"<{class_name}(id={id_val})>"
