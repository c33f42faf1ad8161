"""
Pagination metadata for list endpoints.

`compute_page` is pure: it never touches the database, so the page math can be
checked in isolation and reused by any list operation.
"""

import math
from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResult(BaseModel, Generic[T]):
    """
    One page of results.

    - data: items of the current page
    - page: the 1-based page that was requested (echoed back, even when past the end)
    - size: number of items actually returned (never more than the limit)
    - page_count: total pages at the requested limit
    - last: True when the requested page is the final page or beyond it
    """

    data: list[T] = Field(default_factory=list)
    page: int
    size: int
    page_count: int
    last: bool


def compute_page(data: Sequence[T], page: int, total_records: int, limit: int) -> PaginatedResult[T]:
    """
    Build the page metadata for `data`.

    A non-positive limit is treated as 1 so the division is always defined.
    page_count is the ceiling of the real quotient total_records / limit, and
    `last` holds whenever page >= page_count (0 records gives page_count 0,
    so every page is the last one).
    """
    if limit <= 0:
        limit = 1

    page_count = math.ceil(total_records / limit)

    return PaginatedResult(
        data=list(data),
        page=page,
        size=len(data),
        page_count=page_count,
        last=page >= page_count,
    )


__all__ = ["PaginatedResult", "compute_page"]
