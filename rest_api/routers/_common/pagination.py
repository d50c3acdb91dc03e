"""
Standardized page/size parameters for list and search endpoints.

Pages are zero-based and sliced in memory by `shared.utils.pagination.paginate`.

Usage:
    from rest_api.routers._common.pagination import Pagination, get_pagination

    @router.get("")
    def list_provinces(pagination: Pagination = Depends(get_pagination), ...):
        service.list_all(pagination.page, pagination.size)
"""

from dataclasses import dataclass
from fastapi import Query

from shared.config.constants import Limits


@dataclass
class Pagination:
    """
    Pagination parameters.

    Attributes:
        page: Zero-based page number
        size: Items per page
    """

    page: int = Limits.DEFAULT_PAGE
    size: int = Limits.DEFAULT_PAGE_SIZE


def get_pagination(
    page: int = Query(
        default=Limits.DEFAULT_PAGE,
        ge=0,
        description="Zero-based page number",
    ),
    size: int = Query(
        default=Limits.DEFAULT_PAGE_SIZE,
        ge=0,
        description="Number of items per page",
    ),
) -> Pagination:
    """
    FastAPI dependency for pagination.

    Usage:
        @router.get("/items")
        def list_items(pagination: Pagination = Depends(get_pagination)):
            ...
    """
    return Pagination(page=page, size=size)
