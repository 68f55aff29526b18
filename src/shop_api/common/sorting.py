from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from fastapi import HTTPException, Query

from shop_api.settings import MAX_SORT_FIELDS

from .types import OrderBy, OrderColumns, SortAllowedMap


def _dedupe_preserve_order(tokens: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for token in tokens:
        if token not in seen:
            seen.add(token)
            out.append(token)
    return out


def _parse_json_sort(raw: str) -> list[str]:
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise HTTPException(
            status_code=422,
            detail="sort must be valid JSON",
        ) from exc
    if isinstance(decoded, dict):
        decoded = [decoded]
    if not isinstance(decoded, list):
        raise HTTPException(status_code=422, detail="sort must be a JSON array")
    tokens: list[str] = []
    for index, item in enumerate(decoded):
        if isinstance(item, str):
            token = item.strip()
            if token:
                tokens.append(token)
            continue
        if not isinstance(item, dict):
            raise HTTPException(
                status_code=422,
                detail=f"Sort #{index + 1} must be an object",
            )
        raw_id = item.get("id")
        if not isinstance(raw_id, str) or not raw_id.strip():
            raise HTTPException(
                status_code=422,
                detail=f"Sort #{index + 1} must include a non-empty 'id'",
            )
        desc = item.get("desc", False)
        if not isinstance(desc, bool):
            raise HTTPException(
                status_code=422,
                detail=f"Sort #{index + 1} 'desc' must be a boolean",
            )
        name = raw_id.strip()
        tokens.append(f"-{name}" if desc else name)
    return tokens


def _parse_csv_sort(raw: str) -> list[str]:
    return [segment.strip() for segment in raw.split(",") if segment.strip()]


def parse_sort(raw: str | None) -> list[str]:
    """Normalise the raw ``sort`` query parameter into canonical tokens.

    Accepts either a comma-separated list (``-price,name``) or a JSON array of
    ``{"id": ..., "desc": ...}`` objects.
    """

    if not raw:
        return []

    trimmed = raw.strip()
    if not trimmed:
        return []
    if trimmed[0] in "[{":
        tokens = _parse_json_sort(trimmed)
    else:
        tokens = _parse_csv_sort(trimmed)
    tokens = _dedupe_preserve_order(tokens)
    if len(tokens) > MAX_SORT_FIELDS:
        raise HTTPException(
            status_code=422,
            detail=f"Too many sort fields (max {MAX_SORT_FIELDS}).",
        )
    return tokens


def _extend(order: list[Any], chosen: OrderColumns) -> None:
    if isinstance(chosen, (list, tuple)):
        order.extend(chosen)
    else:
        order.append(chosen)


def resolve_sort(
    tokens: Iterable[str],
    *,
    allowed: SortAllowedMap,
    default: Sequence[str],
    id_field: tuple[OrderColumns, OrderColumns],
) -> OrderBy:
    """Resolve canonical sort tokens into SQLAlchemy order-by columns."""

    materialized = list(tokens) or list(default)
    if not materialized:
        raise HTTPException(status_code=422, detail="No sort tokens provided.")

    order: list[Any] = []
    first_desc: bool | None = None
    names: list[str] = []
    for token in materialized:
        descending = token.startswith("-")
        name = token[1:] if descending else token
        names.append(name)
        columns = allowed.get(name)
        if columns is None:
            allowed_list = ", ".join(sorted(allowed.keys()))
            raise HTTPException(
                status_code=422,
                detail=f"Unsupported sort field '{name}'. Allowed: {allowed_list}",
            )
        _extend(order, columns[1] if descending else columns[0])
        if first_desc is None:
            first_desc = descending

    if "id" not in names:
        _extend(order, id_field[1] if first_desc else id_field[0])

    return tuple(order)


def make_sort_dependency(
    *,
    allowed: SortAllowedMap,
    default: Sequence[str],
    id_field: tuple[OrderColumns, OrderColumns],
) -> Callable[..., OrderBy]:
    """Return a FastAPI dependency that parses and resolves sort tokens."""

    allowed_list = ", ".join(sorted(allowed.keys()))
    doc = (
        "Comma-separated fields, '-' prefix for descending, or a JSON array of "
        f'{{id, desc}}. Allowed: {allowed_list}. Example: "-created_at,name"'
    )

    def dependency(sort: str | None = Query(None, description=doc)) -> OrderBy:
        tokens = parse_sort(sort)
        return resolve_sort(tokens, allowed=allowed, default=default, id_field=id_field)

    return dependency


__all__ = ["make_sort_dependency", "parse_sort", "resolve_sort"]
