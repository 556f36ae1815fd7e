"""
Base Repository implementation.
Provides common data access patterns.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session


ModelT = TypeVar("ModelT")


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository with common operations.

    Subclasses must implement:
    - model: the SQLAlchemy model class
    - _base_query(): base select with default ordering
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    def _base_query(self) -> Select:
        return select(self.model)

    def find_all(self) -> Sequence[ModelT]:
        """Find all entities."""
        return self._db.execute(self._base_query()).scalars().all()

    def find_by_id(self, entity_id: Any, *, refresh: bool = False) -> ModelT | None:
        """
        Find entity by ID.

        Args:
            entity_id: Entity ID
            refresh: Reload from the database even if the entity is already
                in the session (needed after a conditional UPDATE lost a race)
        """
        query = select(self.model).where(self.model.id == entity_id)
        if refresh:
            query = query.execution_options(populate_existing=True)
        return self._db.scalar(query)

    def count(self) -> int:
        """Count entities."""
        return self._db.scalar(select(func.count()).select_from(self.model)) or 0

    def save(self, entity: ModelT) -> ModelT:
        """
        Save entity (insert or update).

        Returns:
            Saved entity
        """
        self._db.add(entity)
        self._db.flush()
        self._db.refresh(entity)
        return entity
