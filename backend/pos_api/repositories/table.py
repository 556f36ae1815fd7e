"""
Table Repository.

Every write that depends on the table's status is a single conditional
statement (`... WHERE id = :id AND status = :expected`). The affected row
count tells the caller whether it won; a read-then-write is never used for
status changes.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import Select, delete, select, update
from sqlalchemy.orm import Session

from pos_api.models import Table
from pos_shared.config.constants import TableStatus

from .base import BaseRepository


class TableRepository(BaseRepository[Table]):
    """Data access for tables."""

    @property
    def model(self) -> type[Table]:
        return Table

    def _base_query(self) -> Select:
        return select(Table).order_by(Table.name)

    def find_by_name(self, name: str) -> Table | None:
        """Exact, case-sensitive name match."""
        return self._db.scalar(select(Table).where(Table.name == name))

    def name_taken(self, name: str, exclude_id: uuid.UUID | None = None) -> bool:
        """True if another table already uses `name`."""
        query = select(Table.id).where(Table.name == name)
        if exclude_id is not None:
            query = query.where(Table.id != exclude_id)
        return self._db.scalar(query.limit(1)) is not None

    def find_occupied_by_code(self, access_code: str) -> Table | None:
        """Table currently holding `access_code`, if it is Occupied."""
        return self._db.scalar(
            select(Table).where(
                Table.access_code == access_code,
                Table.status == TableStatus.OCCUPIED.value,
            )
        )

    def create(self, name: str, capacity: int, created_by_id: str | None = None) -> Table:
        table = Table(
            name=name,
            capacity=capacity,
            status=TableStatus.FREE.value,
            access_code=None,
        )
        table.set_created_by(created_by_id)
        return self.save(table)

    def update_details(
        self,
        table_id: uuid.UUID,
        name: str,
        capacity: int,
        updated_by_id: str | None = None,
    ) -> bool:
        """
        Update name and capacity in one statement. Status columns are untouched.

        Returns:
            True if the row exists and was updated.
        """
        result = self._db.execute(
            update(Table)
            .where(Table.id == table_id)
            .values(name=name, capacity=capacity, updated_by_id=updated_by_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def transition(
        self,
        table_id: uuid.UUID,
        expected: TableStatus,
        target: TableStatus,
        *,
        access_code: str | None,
        assigned_at: datetime | None,
        updated_by_id: str | None = None,
    ) -> bool:
        """
        Compare-and-set the status of a table.

        The row is updated only if its current status equals `expected`.
        Two concurrent calls with the same `expected` value cannot both win.

        Returns:
            True if this call performed the transition.
        """
        values: dict[str, Any] = {
            "status": target.value,
            "access_code": access_code,
            "assigned_at": assigned_at,
            "updated_by_id": updated_by_id,
        }
        result = self._db.execute(
            update(Table)
            .where(Table.id == table_id, Table.status == expected.value)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def delete_if_status(self, table_id: uuid.UUID, expected: TableStatus) -> bool:
        """
        Delete the table only if its status equals `expected`.

        Returns:
            True if the row was deleted.
        """
        result = self._db.execute(
            delete(Table)
            .where(Table.id == table_id, Table.status == expected.value)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1


def get_table_repository(db: Session) -> TableRepository:
    return TableRepository(db)
