"""
Dependency utilities for FastAPI endpoints.
"""

from typing import Annotated, Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import ValidationError
from app.repositories.registry import Repositories
from app.utils.pagination import PageParams, get_page_params

PAGE_PARAMS = ("page", "limit")


def get_repositories(db: AsyncSession = Depends(get_db)) -> Repositories:
    """Build the per-request persistence context on top of the request's session."""
    return Repositories(db)


def strict_query(*names: str) -> Callable[[Request], None]:
    """Build a dependency rejecting query parameters outside ``names``.

    Args:
        names: Query parameter names the endpoint accepts, as sent on the wire
    """
    allowed = frozenset(names)

    def check_query_params(request: Request) -> None:
        unknown = sorted(set(request.query_params) - allowed)
        if unknown:
            raise ValidationError(
                f"Unrecognized query parameter: {unknown[0]}", field=unknown[0]
            )

    return check_query_params


# Reusable annotations for endpoint signatures
Repos = Annotated[Repositories, Depends(get_repositories)]
PageQuery = Annotated[PageParams, Depends(get_page_params)]
