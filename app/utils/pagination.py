"""Shared pagination for list endpoints.

Every list query goes through :func:`paginate`, which derives the count
query from the same statement as the page query so ``total`` always
describes the rows the page was cut from.
"""

import math
from dataclasses import dataclass
from typing import Any, Sequence

from fastapi import Query
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True)
class PageParams:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class PageResult:
    items: Sequence[Any]
    total: int
    params: PageParams

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.params.limit)

    def to_response(self) -> dict[str, Any]:
        return {
            "data": list(self.items),
            "pagination": {
                "page": self.params.page,
                "limit": self.params.limit,
                "total": self.total,
                "total_pages": self.total_pages,
            },
        }


def get_page_params(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> PageParams:
    """FastAPI dependency reading ``page`` and ``limit`` from the query string."""
    return PageParams(page=page, limit=limit)


async def paginate(
    db: AsyncSession,
    statement: Select,
    params: PageParams,
    *,
    order_by: Sequence[Any] = (),
    options: Sequence[Any] = (),
) -> PageResult:
    """Run the count and page queries for a filtered statement.

    Args:
        db: Database session
        statement: Select carrying the joins, filters and grouping. It must
            not carry loader options or ordering; pass those separately.
        params: Requested page and limit
        order_by: Ordering applied to the page query only
        options: ORM loader options applied to the page query only

    Returns:
        PageResult with the page items and the total matching rows
    """
    count_statement = select(func.count()).select_from(statement.subquery())
    total = (await db.execute(count_statement)).scalar_one()

    page_statement = (
        statement.options(*options)
        .order_by(*order_by)
        .offset(params.offset)
        .limit(params.limit)
    )
    result = await db.execute(page_statement)
    return PageResult(items=result.scalars().all(), total=total, params=params)
