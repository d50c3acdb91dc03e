"""
Audit logging service.
Records every mutation of a hierarchy entity for compliance and debugging.

Rows are added to the caller's session and never committed here, so they
share the transaction of the mutation they document.
"""

import json
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy.orm import Session

from rest_api.models import AuditLog
from shared.config.constants import AuditAction
from shared.config.logging import audit_logger as logger


def log_change(
    db: Session,
    *,
    table_name: str,
    record_id: int,
    user_id: Optional[int],
    user_email: Optional[str],
    action: str,
    old_value: Optional[dict] = None,
    new_value: Optional[dict] = None,
) -> AuditLog:
    """
    Log a change to an entity.

    Args:
        db: Database session
        table_name: Table of the entity (e.g., "provinces", "stores")
        record_id: ID the row is keyed by
        user_id: User who made the change
        user_email: Email of user who made the change
        action: Action performed (CREATE, UPDATE, DELETE)
        old_value: Previous state of the entity (UPDATE/DELETE)
        new_value: New state of the entity (CREATE/UPDATE)

    Returns:
        Created AuditLog entry
    """
    audit_entry = AuditLog(
        table_name=table_name,
        record_id=record_id,
        user_id=user_id,
        user_email=user_email,
        action=action,
        old_value=json.dumps(old_value, sort_keys=True) if old_value is not None else None,
        new_value=json.dumps(new_value, sort_keys=True) if new_value is not None else None,
    )

    db.add(audit_entry)
    logger.debug("Audit entry staged", table=table_name, record_id=record_id, action=action)
    return audit_entry


def serialize_model(obj: Any, exclude: list[str] = None) -> dict:
    """
    Serialize a SQLAlchemy model to a dictionary for audit logging.

    Args:
        obj: SQLAlchemy model instance
        exclude: Fields to exclude from serialization

    Returns:
        Dictionary representation of the model's columns
    """
    if exclude is None:
        exclude = []

    result = {}
    for column in obj.__table__.columns:
        if column.name in exclude:
            continue
        value = getattr(obj, column.name)
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        result[column.name] = value

    return result


def _user_fields(user_ctx: dict) -> dict:
    sub = user_ctx.get("sub")
    return {
        "user_id": int(sub) if sub is not None else None,
        "user_email": user_ctx.get("email"),
    }


# Convenience functions for common operations


def log_create(
    db: Session,
    user_ctx: dict,
    table_name: str,
    entity: Any,
    record_id: int | None = None,
) -> AuditLog:
    """Log entity creation. `record_id` overrides the entity's own id."""
    return log_change(
        db,
        table_name=table_name,
        record_id=record_id if record_id is not None else entity.id,
        action=AuditAction.CREATE,
        new_value=serialize_model(entity),
        **_user_fields(user_ctx),
    )


def log_update(
    db: Session,
    user_ctx: dict,
    table_name: str,
    entity: Any,
    old_value: dict,
) -> AuditLog:
    """Log entity update."""
    return log_change(
        db,
        table_name=table_name,
        record_id=entity.id,
        action=AuditAction.UPDATE,
        old_value=old_value,
        new_value=serialize_model(entity),
        **_user_fields(user_ctx),
    )


def log_delete(
    db: Session,
    user_ctx: dict,
    table_name: str,
    record_id: int,
    old_value: dict | None = None,
) -> AuditLog:
    """Log entity deletion. Hard deletes pass no snapshot."""
    return log_change(
        db,
        table_name=table_name,
        record_id=record_id,
        action=AuditAction.DELETE,
        old_value=old_value,
        **_user_fields(user_ctx),
    )
