"""Problem details (``application/problem+json``) payloads for API errors.

Every error response carries a short machine-readable ``type``, a human
``title`` and, for validation failures, a list of per-field ``errors``.
Domain failures use their own ``type`` (``cart_empty``, ``out_of_stock``);
everything else falls back to the status-derived type below.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from fastapi import status
from pydantic import Field

from .schema import BaseSchema

_STATUS_TYPES: dict[int, tuple[str, str]] = {
    status.HTTP_400_BAD_REQUEST: ("bad_request", "Bad request"),
    status.HTTP_401_UNAUTHORIZED: ("unauthorized", "Unauthorized"),
    status.HTTP_403_FORBIDDEN: ("forbidden", "Forbidden"),
    status.HTTP_404_NOT_FOUND: ("not_found", "Not found"),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("method_not_allowed", "Method not allowed"),
    status.HTTP_409_CONFLICT: ("conflict", "Conflict"),
    status.HTTP_422_UNPROCESSABLE_CONTENT: ("validation_error", "Validation error"),
    status.HTTP_423_LOCKED: ("locked", "Locked"),
    status.HTTP_500_INTERNAL_SERVER_ERROR: ("internal_error", "Internal server error"),
}

# Request sections FastAPI prefixes onto validation locations.
_LOCATION_ROOTS = frozenset({"body", "query", "path", "header", "cookie"})


class ProblemDetailsErrorItem(BaseSchema):
    """One failing field: dotted ``path`` (``items[0].quantity``), message and code."""

    path: str | None = None
    message: str
    code: str | None = None


class ProblemDetails(BaseSchema):
    type: str
    title: str
    status: int
    detail: str | None = None
    instance: str
    request_id: str | None = Field(default=None, alias="requestId")
    errors: list[ProblemDetailsErrorItem] | None = None


class ApiError(RuntimeError):
    """An error a service raises to end the request with a problem response."""

    def __init__(
        self,
        *,
        error_type: str,
        status_code: int,
        detail: str | None = None,
        title: str | None = None,
        errors: list[ProblemDetailsErrorItem] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(detail or title or error_type)
        self.error_type = error_type
        self.status_code = status_code
        self.detail = detail
        self.title = title
        self.errors = errors
        self.headers = headers


def field_error(
    path: str,
    message: str,
    *,
    code: str,
    detail: str | None = None,
    status_code: int = status.HTTP_422_UNPROCESSABLE_CONTENT,
) -> ApiError:
    """Return a 422 ``ApiError`` pointing at a single request field."""

    return ApiError(
        error_type="validation_error",
        status_code=status_code,
        detail=detail or message,
        errors=[ProblemDetailsErrorItem(path=path, message=message, code=code)],
    )


def problem_type(status_code: int) -> tuple[str, str]:
    """Return ``(type, title)`` for a status code; unknown codes map to ``error``."""

    return _STATUS_TYPES.get(status_code, ("error", "Error"))


def _field_path(loc: Sequence[Any]) -> str | None:
    path = ""
    for entry in loc:
        if isinstance(entry, int):
            path += f"[{entry}]"
        elif not path and entry in _LOCATION_ROOTS:
            continue
        else:
            path += f".{entry}" if path else str(entry)
    return path or None


def validation_error_items(errors: Iterable[dict[str, Any]]) -> list[ProblemDetailsErrorItem]:
    """Convert ``RequestValidationError.errors()`` entries into error items."""

    return [
        ProblemDetailsErrorItem(
            path=_field_path(entry.get("loc") or ()),
            message=str(entry.get("msg") or "Invalid value"),
            code=entry.get("type"),
        )
        for entry in errors
    ]


def build_problem_details(
    *,
    status_code: int,
    instance: str,
    request_id: str | None,
    detail: str | None = None,
    errors: list[ProblemDetailsErrorItem] | None = None,
    error_type: str | None = None,
    title: str | None = None,
) -> ProblemDetails:
    default_type, default_title = problem_type(status_code)
    return ProblemDetails(
        type=error_type or default_type,
        title=title or default_title,
        status=status_code,
        detail=detail,
        instance=instance,
        request_id=request_id,
        errors=errors,
    )


__all__ = [
    "ApiError",
    "ProblemDetails",
    "ProblemDetailsErrorItem",
    "build_problem_details",
    "field_error",
    "problem_type",
    "validation_error_items",
]
