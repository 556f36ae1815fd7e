"""
Table Service - CRUD on tables.

Status is never edited here; occupancy changes go through AssignmentService.
"""

from __future__ import annotations

import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pos_api.repositories import TableRepository
from pos_shared.config.constants import Limits, TableStatus
from pos_shared.config.logging import mask_code, tables_logger as logger
from pos_shared.infrastructure.db import safe_commit
from pos_shared.utils.exceptions import (
    DuplicateNameError,
    NotFoundError,
    TableOccupiedError,
    ValidationError,
)
from pos_shared.utils.schemas import TableDetail


def _validate_details(name: str, capacity: int) -> None:
    if not name or not name.strip():
        raise ValidationError("Table name is required", field="name")
    if len(name) > Limits.MAX_TABLE_NAME_LENGTH:
        raise ValidationError("Table name is too long", field="name")
    if capacity <= 0:
        raise ValidationError("Capacity must be positive", field="capacity")
    if capacity > Limits.MAX_TABLE_CAPACITY:
        raise ValidationError("Capacity is too large", field="capacity")


class TableService:
    """Service for table management."""

    entity_name = "Table"

    def __init__(self, db: Session):
        self._db = db
        self._repo = TableRepository(db)

    @property
    def repo(self) -> TableRepository:
        return self._repo

    # =========================================================================
    # Read Operations
    # =========================================================================

    def find_all(self) -> list[TableDetail]:
        return [TableDetail.model_validate(t) for t in self._repo.find_all()]

    def find_by_id(self, table_id: uuid.UUID) -> TableDetail:
        """
        Raises:
            NotFoundError: If no table has this id.
        """
        table = self._repo.find_by_id(table_id)
        if table is None:
            raise NotFoundError(self.entity_name, table_id)
        return TableDetail.model_validate(table)

    # =========================================================================
    # Write Operations
    # =========================================================================

    def add(self, name: str, capacity: int, user_id: str | None = None) -> TableDetail:
        """
        Create a Free table.

        Raises:
            DuplicateNameError: If another table already has this name.
        """
        _validate_details(name, capacity)

        if self._repo.name_taken(name):
            raise DuplicateNameError(name)

        try:
            table = self._repo.create(name, capacity, created_by_id=user_id)
            safe_commit(self._db)
        except IntegrityError:
            # Lost a race with a concurrent add of the same name
            self._db.rollback()
            raise DuplicateNameError(name, race=True)

        logger.info("Table created", table_id=str(table.id), name=name, user_id=user_id)
        return TableDetail.model_validate(table)

    def edit(
        self,
        table_id: uuid.UUID,
        name: str,
        capacity: int,
        user_id: str | None = None,
    ) -> TableDetail:
        """
        Change name and capacity. Both fields are written in one statement.

        Raises:
            NotFoundError: If no table has this id.
            DuplicateNameError: If another table already has the new name.
        """
        _validate_details(name, capacity)

        if self._repo.find_by_id(table_id) is None:
            raise NotFoundError(self.entity_name, table_id)
        if self._repo.name_taken(name, exclude_id=table_id):
            raise DuplicateNameError(name, table_id=str(table_id))

        try:
            updated = self._repo.update_details(table_id, name, capacity, updated_by_id=user_id)
            if not updated:
                self._db.rollback()
                raise NotFoundError(self.entity_name, table_id, race=True)
            safe_commit(self._db)
        except IntegrityError:
            self._db.rollback()
            raise DuplicateNameError(name, table_id=str(table_id), race=True)

        logger.info("Table edited", table_id=str(table_id), name=name, user_id=user_id)
        return TableDetail.model_validate(self._repo.find_by_id(table_id, refresh=True))

    def delete(self, table_id: uuid.UUID, user_id: str | None = None) -> None:
        """
        Delete a Free table.

        Raises:
            NotFoundError: If no table has this id.
            TableOccupiedError: If the table is Occupied; its access code stays valid.
        """
        deleted = self._repo.delete_if_status(table_id, TableStatus.FREE)
        if not deleted:
            self._db.rollback()
            current = self._repo.find_by_id(table_id, refresh=True)
            if current is None:
                raise NotFoundError(self.entity_name, table_id)
            raise TableOccupiedError(table_id, access_code=mask_code(current.access_code))

        safe_commit(self._db)
        logger.info("Table deleted", table_id=str(table_id), user_id=user_id)
