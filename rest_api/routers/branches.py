"""
Branch endpoints.
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
from rest_api.services.domain import BranchService
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.schemas import BranchInput


router = APIRouter(prefix="/api/branches", tags=["branches"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_branch(
    body: BranchInput,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    """Create a branch under {"province": {"id": ...}}."""
    try:
        branch = BranchService(db).create(body, user)
    except HANDLED_ERRORS as e:
        return failure("Failed to create branch", e)
    return success("Branch created successfully", branch, status.HTTP_201_CREATED)


@router.get("")
def list_branches(
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    try:
        branches = BranchService(db).list_all(pagination.page, pagination.size)
    except HANDLED_ERRORS as e:
        return failure("Failed to fetch branches", e)
    return success("Branches fetched successfully", branches)


@router.get("/{branch_id}")
def get_branch(
    branch_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    try:
        branch = BranchService(db).get(branch_id)
    except HANDLED_ERRORS as e:
        return failure("Failed to fetch branch", e, status.HTTP_404_NOT_FOUND)
    return success("Branch fetched successfully", branch)


@router.put("/{branch_id}")
def update_branch(
    branch_id: int,
    body: BranchInput,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    """Overwrite name and flags; re-parent when a province id is given."""
    try:
        branch = BranchService(db).update(branch_id, body, user)
    except HANDLED_ERRORS as e:
        return failure("Failed to update branch", e)
    return success("Branch updated successfully", branch)


@router.delete("/{branch_id}")
def delete_branch(
    branch_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> JSONResponse:
    try:
        BranchService(db).delete(branch_id, user)
    except HANDLED_ERRORS as e:
        return failure("Failed to delete branch", e)
    return success("Branch deleted successfully")
