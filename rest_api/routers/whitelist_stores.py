"""
Whitelist store endpoints.

Unlike the other resources, create answers 200 and the list returns the
whitelisted stores themselves.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from rest_api.routers._common import (
    HANDLED_ERRORS,
    Pagination,
    failure,
    get_pagination,
    success,
)
from rest_api.services.domain import WhitelistStoreService
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.schemas import WhitelistStoreInput


router = APIRouter(prefix="/api/whitelist-stores", tags=["whitelist-stores"])


@router.post("")
def create_whitelist_store(
    body: WhitelistStoreInput,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    """Whitelist {"store": {"id": ...}}. A store can be whitelisted once."""
    try:
        entry = WhitelistStoreService(db).create(body, user)
    except HANDLED_ERRORS as e:
        return failure("Failed to create whitelist store", e)
    return success("Whitelist store created successfully", entry)


@router.get("")
def list_whitelist_stores(
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    try:
        stores = WhitelistStoreService(db).list_all(pagination.page, pagination.size)
    except HANDLED_ERRORS as e:
        return failure("Failed to retrieve whitelist stores", e)
    return success("Whitelist stores retrieved successfully", stores)


@router.get("/{whitelist_store_id}")
def get_whitelist_store(
    whitelist_store_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    try:
        entry = WhitelistStoreService(db).get(whitelist_store_id)
    except HANDLED_ERRORS as e:
        return failure("Failed to retrieve whitelist store", e, status.HTTP_404_NOT_FOUND)
    return success("Whitelist store retrieved successfully", entry)


@router.put("/{whitelist_store_id}")
def update_whitelist_store(
    whitelist_store_id: int,
    body: WhitelistStoreInput,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    """Point the entry at another store."""
    try:
        entry = WhitelistStoreService(db).update(whitelist_store_id, body, user)
    except HANDLED_ERRORS as e:
        return failure("Failed to update whitelist store", e)
    return success("Whitelist store updated successfully", entry)


@router.delete("/{whitelist_store_id}")
def delete_whitelist_store(
    whitelist_store_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    try:
        WhitelistStoreService(db).delete(whitelist_store_id, user)
    except HANDLED_ERRORS as e:
        return failure("Failed to delete whitelist store", e)
    return success("Whitelist store deleted successfully")
