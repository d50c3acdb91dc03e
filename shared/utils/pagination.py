"""
In-memory pagination over an already loaded sequence.

Usage:
    from shared.utils.pagination import paginate

    paginate(stores, page=0, size=50)
"""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def paginate(items: Sequence[T], page: int, size: int) -> list[T]:
    """
    Return the zero-based `page` of `items`, `size` items per page.

    Out-of-range input never raises: a page past the end, a negative page
    or a non-positive size all yield an empty list.
    """
    if page < 0 or size <= 0:
        return []
    start = page * size
    if start >= len(items):
        return []
    return list(items[start:min(start + size, len(items))])
