"""
Assignment Service - binds a table to a dining session.

assign:  Free -> Occupied, mints a fresh access code.
release: Occupied -> Free, clears the access code.

Both are a single conditional UPDATE keyed on the current status. When the
UPDATE matches no row the table is re-read from the database (bypassing the
session identity map) to decide between NotFound and the state conflict.
Conflicts are never retried here.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from pos_api.repositories import TableRepository
from pos_api.services.domain.table_state import TableTransition, check_transition
from pos_shared.config.logging import audit_table_event, mask_code
from pos_shared.config.settings import Settings
from pos_shared.infrastructure.db import safe_commit
from pos_shared.security.access_codes import generate_access_code
from pos_shared.utils.exceptions import AlreadyAssignedError, NotAssignedError, NotFoundError
from pos_shared.utils.schemas import TableDetail


class AssignmentService:
    """Coordinates occupancy transitions of tables."""

    def __init__(self, db: Session, settings: Settings):
        self._db = db
        self._settings = settings
        self._repo = TableRepository(db)

    def assign(self, table_id: uuid.UUID, user_id: str | None = None) -> TableDetail:
        """
        Assign a Free table and return it with its new access code.

        Raises:
            NotFoundError: If no table has this id.
            AlreadyAssignedError: If the table is Occupied. Its code is unchanged.
        """
        table = self._repo.find_by_id(table_id)
        if table is None:
            raise NotFoundError("Table", table_id)
        check_transition(table.status, TableTransition.ASSIGN, table_id)

        code = generate_access_code(self._settings.access_code_bytes)
        won = self._repo.transition(
            table_id,
            TableTransition.ASSIGN.source,
            TableTransition.ASSIGN.target,
            access_code=code,
            assigned_at=datetime.now(timezone.utc),
            updated_by_id=user_id,
        )
        if not won:
            self._lost_race(table_id, TableTransition.ASSIGN)

        safe_commit(self._db)
        assigned = self._repo.find_by_id(table_id, refresh=True)
        audit_table_event("TABLE_ASSIGNED", table_id, user_id, access_code=mask_code(code))
        return TableDetail.model_validate(assigned)

    def release(self, table_id: uuid.UUID, user_id: str | None = None) -> TableDetail:
        """
        Release an Occupied table. The previous access code stops working.

        Raises:
            NotFoundError: If no table has this id.
            NotAssignedError: If the table is already Free.
        """
        table = self._repo.find_by_id(table_id)
        if table is None:
            raise NotFoundError("Table", table_id)
        check_transition(table.status, TableTransition.RELEASE, table_id)

        previous_code = table.access_code
        won = self._repo.transition(
            table_id,
            TableTransition.RELEASE.source,
            TableTransition.RELEASE.target,
            access_code=None,
            assigned_at=None,
            updated_by_id=user_id,
        )
        if not won:
            self._lost_race(table_id, TableTransition.RELEASE)

        safe_commit(self._db)
        released = self._repo.find_by_id(table_id, refresh=True)
        audit_table_event(
            "TABLE_RELEASED", table_id, user_id, access_code=mask_code(previous_code)
        )
        return TableDetail.model_validate(released)

    def _lost_race(self, table_id: uuid.UUID, transition: TableTransition) -> None:
        """Raise the error for a conditional UPDATE that matched no row."""
        self._db.rollback()
        current = self._repo.find_by_id(table_id, refresh=True)
        if current is None:
            raise NotFoundError("Table", table_id, race=True)
        check_transition(current.status, transition, table_id)
        # The row went through a full cycle between our read and write
        if transition is TableTransition.ASSIGN:
            raise AlreadyAssignedError(table_id, race=True)
        raise NotAssignedError(table_id, race=True)
