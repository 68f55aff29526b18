"""Free-text search helpers shared by list endpoints."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from fastapi import HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from shop_api.settings import MAX_SEARCH_LEN, MIN_SEARCH_LEN

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user input only matches literally."""

    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def normalize_search(value: str | None) -> str | None:
    if value is None:
        return None
    term = " ".join(value.split())
    if not term:
        return None
    if len(term) < MIN_SEARCH_LEN or len(term) > MAX_SEARCH_LEN:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail=[
                {
                    "loc": ["query", "search"],
                    "msg": (
                        f"Search must be between {MIN_SEARCH_LEN} and "
                        f"{MAX_SEARCH_LEN} characters."
                    ),
                    "type": "string_length",
                }
            ],
        )
    return term


def search_clause(
    columns: Sequence[ColumnElement[Any]],
    term: str,
) -> ColumnElement[bool]:
    """Return ``col1 ILIKE %term% OR col2 ILIKE %term% ...``."""

    pattern = f"%{escape_like(term)}%"
    return or_(*(column.ilike(pattern, escape=LIKE_ESCAPE) for column in columns))


def search_query(
    search: str | None = Query(
        None,
        description=f"Case-insensitive substring match ({MIN_SEARCH_LEN}-{MAX_SEARCH_LEN} chars).",
    ),
) -> str | None:
    return normalize_search(search)


__all__ = ["LIKE_ESCAPE", "escape_like", "normalize_search", "search_clause", "search_query"]
