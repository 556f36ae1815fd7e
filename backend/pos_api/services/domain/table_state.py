"""
Table occupancy state machine.

    Free --assign--> Occupied --release--> Free

Any other move is rejected. The `source` of a transition is also the
expected value in the conditional UPDATE that performs it, so the check
here and the write in the repository can never disagree.
"""

from __future__ import annotations

from enum import Enum

from pos_shared.config.constants import TableStatus
from pos_shared.utils.exceptions import AlreadyAssignedError, NotAssignedError


class TableTransition(Enum):
    ASSIGN = (TableStatus.FREE, TableStatus.OCCUPIED)
    RELEASE = (TableStatus.OCCUPIED, TableStatus.FREE)

    @property
    def source(self) -> TableStatus:
        return self.value[0]

    @property
    def target(self) -> TableStatus:
        return self.value[1]


def can_transition(current: str | TableStatus, transition: TableTransition) -> bool:
    return TableStatus(current) == transition.source


def check_transition(current: str | TableStatus, transition: TableTransition, table_id=None) -> None:
    """
    Raise the conflict error for a transition that is not allowed from `current`.

    Raises:
        AlreadyAssignedError: ASSIGN on an Occupied table.
        NotAssignedError: RELEASE on a Free table.
    """
    if can_transition(current, transition):
        return
    if transition is TableTransition.ASSIGN:
        raise AlreadyAssignedError(table_id, status=str(TableStatus(current).value))
    raise NotAssignedError(table_id, status=str(TableStatus(current).value))
