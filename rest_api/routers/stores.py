"""
Store endpoints.
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
from rest_api.services.domain import StoreService
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.schemas import StoreInput


router = APIRouter(prefix="/api/stores", tags=["stores"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_store(
    body: StoreInput,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    """Create a store under {"branch": {"id": ...}}."""
    try:
        store = StoreService(db).create(body, user)
    except HANDLED_ERRORS as e:
        return failure("Failed to create store", e)
    return success("Store created successfully", store, status.HTTP_201_CREATED)


@router.get("")
def list_stores(
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    try:
        stores = StoreService(db).list_all(pagination.page, pagination.size)
    except HANDLED_ERRORS as e:
        return failure("Failed to fetch stores", e)
    return success("Stores fetched successfully", stores)


@router.get("/{store_id}")
def get_store(
    store_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    try:
        store = StoreService(db).get(store_id)
    except HANDLED_ERRORS as e:
        return failure("Failed to fetch store", e, status.HTTP_404_NOT_FOUND)
    return success("Store fetched successfully", store)


@router.put("/{store_id}")
def update_store(
    store_id: int,
    body: StoreInput,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    try:
        store = StoreService(db).update(store_id, body, user)
    except HANDLED_ERRORS as e:
        return failure("Failed to update store", e)
    return success("Store updated successfully", store)


@router.delete("/{store_id}")
def delete_store(
    store_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    try:
        StoreService(db).delete(store_id, user)
    except HANDLED_ERRORS as e:
        return failure("Failed to delete store", e)
    return success("Store deleted successfully")
