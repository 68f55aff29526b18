from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Generic, TypeVar

from fastapi import Query
from pydantic import Field
from sqlalchemy import func, select, text
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from shop_api.common.schema import BaseSchema
from shop_api.settings import (
    COUNT_STATEMENT_TIMEOUT_MS,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)

T = TypeVar("T")
P = TypeVar("P", bound="Page[Any]")


class PageParams(BaseSchema):
    """Standard query parameters for paginated list endpoints."""

    page: int = Field(1, ge=1, description="1-based page number")
    per_page: int = Field(
        DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description=f"Items per page (max {MAX_PAGE_SIZE})",
    )


def get_page_params(
    page: int = Query(1, ge=1, description="1-based page number"),
    per_page: int = Query(
        DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description=f"Items per page (max {MAX_PAGE_SIZE})",
    ),
) -> PageParams:
    return PageParams(page=page, per_page=per_page)


class Page(BaseSchema, Generic[T]):
    """Uniform response envelope for list endpoints."""

    items: Sequence[T]
    page: int
    per_page: int
    has_next: bool
    has_previous: bool
    total: int | None = None

    def map_into(self, page_cls: type[P], mapper: Callable[[Any], Any]) -> P:
        """Return ``page_cls`` carrying this envelope with mapped items."""

        return page_cls(
            items=[mapper(item) for item in self.items],
            page=self.page,
            per_page=self.per_page,
            has_next=self.has_next,
            has_previous=self.has_previous,
            total=self.total,
        )


def paginate_sql(
    session: Session,
    stmt: Select,
    *,
    page: int,
    per_page: int,
    order_by: Sequence[ColumnElement[Any]],
    include_total: bool = True,
) -> Page[Any]:
    """Execute ``stmt`` with limit/offset pagination."""

    offset = (page - 1) * per_page
    ordered_stmt = stmt.order_by(*order_by)

    if include_total:
        if (
            COUNT_STATEMENT_TIMEOUT_MS
            and session.bind is not None
            and getattr(session.bind.dialect, "name", None) == "postgresql"
        ):
            timeout_ms = int(COUNT_STATEMENT_TIMEOUT_MS)
            session.execute(text(f"SET LOCAL statement_timeout = {timeout_ms}"))
        count_stmt = select(func.count()).select_from(ordered_stmt.order_by(None).subquery())
        total = session.execute(count_stmt).scalar_one()
        rows = session.execute(ordered_stmt.limit(per_page).offset(offset)).scalars().all()
        has_next = (page * per_page) < total
    else:
        rows = session.execute(ordered_stmt.limit(per_page + 1).offset(offset)).scalars().all()
        has_next = len(rows) > per_page
        rows = rows[:per_page]
        total = None

    return Page(
        items=list(rows),
        page=page,
        per_page=per_page,
        has_next=has_next,
        has_previous=page > 1,
        total=total,
    )


__all__ = ["Page", "PageParams", "get_page_params", "paginate_sql"]
