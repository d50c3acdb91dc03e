"""
Base Repository implementation.
Provides the data access patterns shared by the hierarchy entities.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Sequence
from sqlalchemy.orm import Session
from sqlalchemy import Select


ModelT = TypeVar("ModelT")


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository with common operations.

    Subclasses must implement:
    - model: Return the SQLAlchemy model class
    - _base_query(): Return base query with eager loading
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    @abstractmethod
    def _base_query(self) -> Select:
        """
        Return base query with proper eager loading.
        Subclasses must implement this with selectinload/joinedload.
        """
        ...

    def _visible(self, query: Select) -> Select:
        """Restrict a query to active, non-deleted rows."""
        return query.where(
            self.model.is_active.is_(True),
            self.model.is_deleted.is_(False),
        )

    def find_by_id(self, entity_id: int) -> ModelT | None:
        """
        Find entity by ID, whatever its status flags.

        Returns:
            Entity or None
        """
        query = self._base_query().where(self.model.id == entity_id)
        return self._db.scalar(query)

    def find_active(self) -> Sequence[ModelT]:
        """All active, non-deleted entities ordered by id."""
        query = self._visible(self._base_query()).order_by(self.model.id)
        return self._db.execute(query).scalars().unique().all()

    def add(self, entity: ModelT) -> ModelT:
        """Stage a new entity and flush so its id is assigned."""
        self._db.add(entity)
        self._db.flush()
        return entity

    def flush(self) -> None:
        self._db.flush()
