"""
Province endpoints.

All routes require a bearer token. Failures return the error envelope with
400, except get-by-id which returns 404.
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from rest_api.routers._common import (
    HANDLED_ERRORS,
    Pagination,
    failure,
    get_pagination,
    success,
)
from rest_api.services.domain import ProvinceService
from shared.config.constants import Limits
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.schemas import ProvinceInput


router = APIRouter(prefix="/api/provinces", tags=["provinces"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_province(
    body: ProvinceInput,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    try:
        province = ProvinceService(db).create(body, user)
    except HANDLED_ERRORS as e:
        return failure("Failed to create province", e)
    return success("Province created successfully", province, status.HTTP_201_CREATED)


@router.get("")
def list_provinces(
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    """Active, non-deleted provinces ordered by id."""
    try:
        provinces = ProvinceService(db).list_all(pagination.page, pagination.size)
    except HANDLED_ERRORS as e:
        return failure("Failed to fetch provinces", e)
    return success("Provinces fetched successfully", provinces)


@router.get("/search")
def search_provinces(
    name: str = Query(..., max_length=Limits.MAX_SEARCH_TERM_LENGTH),
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    """Case-insensitive substring search on the province name."""
    try:
        provinces = ProvinceService(db).search_by_name(name, pagination.page, pagination.size)
    except HANDLED_ERRORS as e:
        return failure("Failed to search provinces", e)
    return success("Provinces fetched successfully", provinces)


@router.get("/search/stores")
def search_stores_by_province(
    name: str = Query(..., max_length=Limits.MAX_SEARCH_TERM_LENGTH),
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    """Stores of the first matching province plus all whitelisted stores."""
    try:
        result = ProvinceService(db).search_stores_by_province(
            name, pagination.page, pagination.size
        )
    except HANDLED_ERRORS as e:
        return failure("Failed to fetch stores by province", e)
    return success("Stores fetched successfully by province", result)


@router.get("/{province_id}")
def get_province(
    province_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    """Fetch by id; soft-deleted provinces are still returned."""
    try:
        province = ProvinceService(db).get(province_id)
    except HANDLED_ERRORS as e:
        return failure("Failed to fetch province", e, status.HTTP_404_NOT_FOUND)
    return success("Province fetched successfully", province)


@router.put("/{province_id}")
def update_province(
    province_id: int,
    body: ProvinceInput,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    try:
        province = ProvinceService(db).update(province_id, body, user)
    except HANDLED_ERRORS as e:
        return failure("Failed to update province", e)
    return success("Province updated successfully", province)


@router.delete("/{province_id}")
def delete_province(
    province_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    try:
        ProvinceService(db).delete(province_id, user)
    except HANDLED_ERRORS as e:
        return failure("Failed to delete province", e)
    return success("Province deleted successfully")
