"""
Table Model.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from pos_shared.config.constants import TableStatus

from .base import AuditMixin, Base


class Table(AuditMixin, Base):
    """
    Physical table in the restaurant.

    `access_code` is set exactly while the table is Occupied. Both columns
    only change through conditional UPDATEs in TableRepository.
    """

    # "table" is a reserved SQL keyword
    __tablename__ = "restaurant_table"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        Text, nullable=False, default=TableStatus.FREE.value, index=True
    )  # Free, Occupied
    access_code: Mapped[Optional[str]] = mapped_column(Text, nullable=True, unique=True)
    assigned_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_table_capacity_positive"),
        CheckConstraint(
            "status IN ('Free', 'Occupied')",
            name="ck_table_status",
        ),
        CheckConstraint(
            "(status = 'Occupied' AND access_code IS NOT NULL)"
            " OR (status = 'Free' AND access_code IS NULL)",
            name="ck_table_access_code_occupancy",
        ),
        Index("ix_table_access_code_status", "access_code", "status"),
    )

    @property
    def is_occupied(self) -> bool:
        return self.status == TableStatus.OCCUPIED.value

    def __repr__(self) -> str:
        return f"<Table(id={self.id}, name='{self.name}', status={self.status})>"
