"""
Base Service Classes.

Provides abstract base classes for application services that:
- Use Repository for data access (not direct queries)
- Use the output schema for DTO transformation
- Run every mutation and its audit row in one transaction

Architecture:
    Router (thin) → Service (business logic) → Repository (data access) → Model

Usage:
    from rest_api.services.base_service import BaseCRUDService

    class ProvinceService(BaseCRUDService[Province, ProvinceOutput]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                repo=get_province_repository(db),
                output_schema=ProvinceOutput,
                entity_name="Province",
                table_name=AuditTable.PROVINCES,
            )
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar, Type

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import Base
from rest_api.repositories import BaseRepository
from rest_api.services.audit import log_create, log_update, log_delete, serialize_model
from shared.infrastructure.db import transaction
from shared.config.logging import get_logger
from shared.utils.exceptions import (
    AppException,
    BlankFieldError,
    ConflictError,
    MissingReferenceError,
    NotFoundError,
)
from shared.utils.pagination import paginate
from shared.utils.schemas import EntityRef

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)
ParentT = TypeVar("ParentT", bound=Base)


def require_text(value: str | None, field: str) -> str:
    """Return `value` unchanged, or raise if it is missing or whitespace only."""
    if value is None or not value.strip():
        raise BlankFieldError(field)
    return value


def require_ref(ref: EntityRef | None, entity: str) -> int:
    """Return the id of a nested reference, or raise if either is missing."""
    if ref is None or ref.id is None:
        raise MissingReferenceError(entity)
    return ref.id


def resolve_ref(repo: BaseRepository[ParentT], entity_id: int, entity: str) -> ParentT:
    """Load a referenced entity by id, whatever its flags."""
    found = repo.find_by_id(entity_id)
    if found is None:
        raise NotFoundError(entity, entity_id)
    return found


class BaseService(ABC, Generic[ModelT]):
    """
    Abstract base service for domain operations.

    Subclasses implement specific business logic while this class
    provides common infrastructure (repository access, logging).
    """

    def __init__(self, db: Session, repo: BaseRepository[ModelT]):
        self._db = db
        self._repo = repo

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    @property
    def repo(self) -> BaseRepository[ModelT]:
        """Repository for data access."""
        return self._repo

    @staticmethod
    def _actor(user: dict[str, Any]) -> tuple[int | None, str | None]:
        """(user_id, user_email) out of the user context."""
        sub = user.get("sub")
        return (int(sub) if sub is not None else None, user.get("email"))


class BaseCRUDService(BaseService[ModelT], Generic[ModelT, OutputT]):
    """
    Base service for hierarchy entities.

    Subclasses provide `_build` and `_apply_update`; this class handles
    lookup, pagination, soft delete, audit and transactions.
    """

    def __init__(
        self,
        db: Session,
        repo: BaseRepository[ModelT],
        output_schema: Type[OutputT],
        entity_name: str,
        table_name: str,
    ):
        super().__init__(db, repo)
        self._output_schema = output_schema
        self._entity_name = entity_name
        self._table_name = table_name

    @property
    def entity_name(self) -> str:
        """Human-readable entity name for messages."""
        return self._entity_name

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get(self, entity_id: int) -> OutputT:
        """
        Get entity by ID. Inactive and soft-deleted entities are returned too.

        Raises:
            NotFoundError: If entity not found.
        """
        return self.to_output(self.get_entity(entity_id))

    def get_entity(self, entity_id: int) -> ModelT:
        """Get raw entity (for internal use)."""
        entity = self._repo.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    def list_all(self, page: int, size: int) -> list[OutputT]:
        """One page of the active, non-deleted entities ordered by id."""
        entities = paginate(self._repo.find_active(), page, size)
        return [self.to_output(e) for e in entities]

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, data: BaseModel, user: dict[str, Any]) -> OutputT:
        """
        Create new entity and log CREATE.

        Raises:
            ValidationError: If data is invalid.
            NotFoundError: If a referenced parent does not exist.
        """
        self._validate_create(data)
        user_id, user_email = self._actor(user)

        try:
            with transaction(self._db):
                entity = self._build(data)
                entity.set_created_by(user_id, user_email)
                self._repo.add(entity)
                log_create(
                    self._db, user, self._table_name, entity,
                    record_id=self._audit_record_id(entity),
                )
        except IntegrityError as e:
            raise self._integrity_error(e)

        logger.info(f"{self._entity_name} created", id=entity.id, user_id=user_id)
        return self.to_output(entity)

    def update(self, entity_id: int, data: BaseModel, user: dict[str, Any]) -> OutputT:
        """
        Overwrite an existing entity and log UPDATE with before/after snapshots.

        Raises:
            NotFoundError: If the entity or a referenced parent does not exist.
            ValidationError: If data is invalid.
        """
        entity = self.get_entity(entity_id)
        self._validate_update(entity, data)
        user_id, user_email = self._actor(user)
        old_value = serialize_model(entity)

        try:
            with transaction(self._db):
                self._apply_update(entity, data)
                entity.set_updated_by(user_id, user_email)
                self._repo.flush()
                log_update(self._db, user, self._table_name, entity, old_value)
        except IntegrityError as e:
            raise self._integrity_error(e)

        logger.info(f"{self._entity_name} updated", id=entity_id, user_id=user_id)
        return self.to_output(entity)

    def delete(self, entity_id: int, user: dict[str, Any]) -> None:
        """
        Soft delete: set is_deleted and log DELETE with the prior snapshot.

        Deleting an already deleted entity succeeds and logs again.

        Raises:
            NotFoundError: If entity not found.
        """
        entity = self.get_entity(entity_id)
        user_id, user_email = self._actor(user)
        old_value = serialize_model(entity)

        with transaction(self._db):
            entity.soft_delete(user_id, user_email)
            self._repo.flush()
            log_delete(self._db, user, self._table_name, entity.id, old_value)

        logger.info(f"{self._entity_name} deleted", id=entity_id, user_id=user_id)

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModelT) -> OutputT:
        """
        Convert entity to output DTO.

        Override this method for custom transformation logic.
        """
        return self._output_schema.model_validate(entity)

    # =========================================================================
    # Hooks (override in subclasses)
    # =========================================================================

    def _validate_create(self, data: BaseModel) -> None:
        """
        Validate data before create.

        Raises:
            ValidationError: If validation fails.
        """
        self._validate_fields(data)

    def _validate_update(self, entity: ModelT, data: BaseModel) -> None:
        """
        Validate data before update.

        Raises:
            ValidationError: If validation fails.
        """
        self._validate_fields(data)

    def _validate_fields(self, data: BaseModel) -> None:
        """Field rules shared by create and update."""
        pass

    @abstractmethod
    def _build(self, data: BaseModel) -> ModelT:
        """Build a new, unsaved entity. Resolves parent references."""
        ...

    @abstractmethod
    def _apply_update(self, entity: ModelT, data: BaseModel) -> None:
        """Overwrite the entity's fields from request data."""
        ...

    def _audit_record_id(self, entity: ModelT) -> int:
        """Id the CREATE audit row is keyed by."""
        return entity.id

    def _integrity_error(self, error: IntegrityError) -> AppException:
        """Map a constraint violation to a domain error."""
        return ConflictError(
            f"{self._entity_name} conflicts with existing data",
            reason=str(error.orig),
        )
