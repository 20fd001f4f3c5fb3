"""Pagination utilities for list endpoints."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from fastapi import Query, Request
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Query as SQLAlchemyQuery

from personal_crm.core.config import settings
from personal_crm.core.errors import LimitTooBigError


T = TypeVar("T")

DEFAULT_PAGE = 1
# Keeps the OFFSET inside a 64-bit integer
MAX_PAGE = 2**31 - 1


@dataclass
class PaginationParams:
    """Pagination parameters from query string."""
    page: int
    per_page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


def get_pagination(
    page: int = Query(DEFAULT_PAGE, ge=1, le=MAX_PAGE, description="Page number (1-indexed)"),
    limit: int | None = Query(
        None,
        ge=1,
        description=f"Items per page (default {settings.API_DEFAULT_LIMIT}, max {settings.API_MAX_LIMIT})",
    ),
) -> PaginationParams:
    """
    Pagination dependency.

    Usage:
        @router.get("/items")
        def list_items(pagination: PaginationParams = Depends(get_pagination)):
            ...

    Raises:
        LimitTooBigError: limit is above API_MAX_LIMIT
    """
    per_page = settings.API_DEFAULT_LIMIT if limit is None else limit
    if per_page > settings.API_MAX_LIMIT:
        raise LimitTooBigError()
    return PaginationParams(page=page, per_page=per_page)


class PageLinks(BaseModel):
    first: str
    last: str
    prev: str | None
    next: str | None


class PageMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_page: int
    from_: int | None = Field(alias="from")
    last_page: int
    path: str
    per_page: int
    to: int | None
    total: int


class PaginatedResponse(BaseModel, Generic[T]):
    """Standard paginated response structure."""
    data: list[T]
    links: PageLinks
    meta: PageMeta

    @classmethod
    def create(
        cls,
        items: list[T],
        total: int,
        pagination: PaginationParams,
        request: Request,
    ) -> "PaginatedResponse[T]":
        last_page = max((total + pagination.per_page - 1) // pagination.per_page, 1)
        def page_url(page: int) -> str:
            return str(request.url.include_query_params(page=page))

        has_items = len(items) > 0
        return cls(
            data=items,
            links=PageLinks(
                first=page_url(1),
                last=page_url(last_page),
                prev=page_url(pagination.page - 1) if pagination.page > 1 else None,
                next=page_url(pagination.page + 1) if pagination.page < last_page else None,
            ),
            meta=PageMeta(
                current_page=pagination.page,
                from_=pagination.offset + 1 if has_items else None,
                last_page=last_page,
                path=str(request.url).split("?", 1)[0],
                per_page=pagination.per_page,
                to=pagination.offset + len(items) if has_items else None,
                total=total,
            ),
        )


def paginate_query(query: SQLAlchemyQuery, pagination: PaginationParams) -> tuple[list, int]:
    """
    Apply pagination to a SQLAlchemy query.

    Returns:
        (items, total_count)
    """
    total = query.count()
    items = query.offset(pagination.offset).limit(pagination.per_page).all()
    return items, total
