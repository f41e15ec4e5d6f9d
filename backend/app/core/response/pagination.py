import math
from typing import Annotated, Any, Generic, List, TypeVar
from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from fastapi import Depends, Query as GetQuery

from app.core.response.base_model import CustomBaseModel
from app.core.validations.exceptions import RequestValidationError
from app.db.core import gather_in_sessions

T = TypeVar("T")

MAX_LIMIT = 100


class _PaginationParams(BaseModel):
    """Pagination parameters as a Pydantic model"""

    page: int = 1
    limit: int = 10


def validate_page_params(page: int, limit: int) -> None:
    if page < 1:
        raise RequestValidationError("Page must be greater than 0")
    if limit < 1:
        raise RequestValidationError("Limit must be greater than 0")
    if limit > MAX_LIMIT:
        raise RequestValidationError(
            f"Limit cannot exceed {MAX_LIMIT} for performance reasons"
        )


def get_pagination_params(
    page: Annotated[int, GetQuery()] = 1,
    limit: Annotated[int, GetQuery()] = 10,
) -> _PaginationParams:
    validate_page_params(page, limit)
    return _PaginationParams(page=page, limit=limit)


def get_dashboard_pagination_params(
    page: Annotated[int, GetQuery()] = 1,
    limit: Annotated[int, GetQuery()] = 20,
) -> _PaginationParams:
    validate_page_params(page, limit)
    return _PaginationParams(page=page, limit=limit)


class PageMeta(CustomBaseModel):
    total: int
    page: int
    limit: int
    total_pages: int
    skip: int
    take: int
    has_more: bool


class PaginatedResponse(CustomBaseModel, Generic[T]):
    data: List[T]
    meta: PageMeta


def build_page_meta(total: int, page: int, limit: int) -> dict:
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if limit else 0,
        "skip": (page - 1) * limit,
        "take": limit,
        "has_more": page * limit < total,
    }


def count_query(query: Select) -> Select:
    return select(func.count()).select_from(query.order_by(None).subquery())


async def paginate(
    session_factory: async_sessionmaker,
    query: Select,
    page: int,
    limit: int,
) -> dict[str, Any]:
    """
    Fetch one page of ``query`` and its total row count concurrently.

    Parameters are validated before any statement is issued.
    """
    validate_page_params(page, limit)
    skip = (page - 1) * limit

    async def fetch(session: AsyncSession):
        result = await session.execute(query.offset(skip).limit(limit))
        return list(result.scalars())

    async def count(session: AsyncSession):
        return await session.scalar(count_query(query)) or 0

    items, total = await gather_in_sessions(session_factory, fetch, count)
    return {"data": items, "meta": build_page_meta(total, page, limit)}


async def paginate_skip_take(
    session_factory: async_sessionmaker,
    query: Select,
    skip: int,
    take: int,
    max_take: int = 1000,
) -> dict[str, Any]:
    if skip < 0:
        raise RequestValidationError("Skip parameter cannot be negative")
    if take < 1:
        raise RequestValidationError("Take parameter must be greater than 0")
    if take > max_take:
        raise RequestValidationError(
            f"Take parameter cannot exceed {max_take} for performance reasons"
        )

    async def fetch(session: AsyncSession):
        result = await session.execute(query.offset(skip).limit(take))
        return list(result.scalars())

    async def count(session: AsyncSession):
        return await session.scalar(count_query(query)) or 0

    items, total = await gather_in_sessions(session_factory, fetch, count)
    meta = build_page_meta(total, skip // take + 1, take)
    meta["skip"] = skip
    meta["has_more"] = skip + take < total
    return {"data": items, "meta": meta}


PaginationParams = Annotated[_PaginationParams, Depends(get_pagination_params)]
DashboardPaginationParams = Annotated[
    _PaginationParams, Depends(get_dashboard_pagination_params)
]
