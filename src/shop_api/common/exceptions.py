"""Centralized FastAPI exception handlers with structured logging."""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from shop_api.common.errors import DomainError
from shop_api.common.logging import current_request_id, log_context
from shop_api.common.problem_details import (
    ApiError,
    ProblemDetailsErrorItem,
    build_problem_details,
    problem_type,
    validation_error_items,
)

_UNHANDLED_LOGGER = logging.getLogger("shop_api.errors")
_HTTP_LOGGER = logging.getLogger("shop_api.http")
_PROBLEM_MEDIA_TYPE = "application/problem+json"


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "correlation_id", None) or current_request_id()


def _problem_response(
    *,
    request: Request,
    status_code: int,
    detail: str | None,
    errors: list[ProblemDetailsErrorItem] | None,
    error_type: str | None = None,
    title: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    problem = build_problem_details(
        status_code=status_code,
        instance=str(request.url.path),
        request_id=_request_id(request),
        detail=detail,
        errors=errors,
        error_type=error_type,
        title=title,
    )
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(by_alias=True, exclude_none=True, mode="json"),
        media_type=_PROBLEM_MEDIA_TYPE,
        headers=headers,
    )


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected exceptions.

    Registered as the ``Exception`` handler. Ensures that any unhandled error
    results in:

    * a JSON error response with HTTP 500, and
    * a structured ERROR log including a stack trace.
    """
    _UNHANDLED_LOGGER.exception(
        "unhandled_exception",
        extra=log_context(
            path=str(request.url.path),
            method=request.method,
            exception_type=type(exc).__name__,
            detail=str(exc),
        ),
    )

    return _problem_response(
        request=request,
        status_code=500,
        detail="Internal server error",
        errors=None,
        error_type=problem_type(500)[0],
    )


def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for FastAPI HTTPException instances.

    4xx responses are returned without logging; 5xx responses are logged at
    ERROR level with structured metadata.
    """
    if exc.status_code >= 500:
        _HTTP_LOGGER.error(
            "http_exception",
            extra=log_context(
                path=str(request.url.path),
                method=request.method,
                status_code=exc.status_code,
                detail=exc.detail,
            ),
        )

    # 500s never echo internal detail text.
    detail_text = "Internal server error" if exc.status_code == 500 else str(exc.detail)
    return _problem_response(
        request=request,
        status_code=exc.status_code,
        detail=detail_text,
        errors=None,
        headers=getattr(exc, "headers", None),
    )


def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors = validation_error_items(exc.errors())
    return _problem_response(
        request=request,
        status_code=422,
        detail="Invalid request",
        errors=errors,
        error_type=problem_type(422)[0],
    )


def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return _problem_response(
        request=request,
        status_code=exc.status_code,
        detail=exc.detail,
        errors=exc.errors,
        error_type=exc.error_type,
        title=exc.title,
        headers=exc.headers,
    )


def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return _problem_response(
        request=request,
        status_code=exc.status_code,
        detail=str(exc),
        errors=[
            ProblemDetailsErrorItem(path=exc.path, message=str(exc), code=exc.code),
        ],
        error_type=exc.code,
        title=problem_type(exc.status_code)[1],
    )


def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    _HTTP_LOGGER.info(
        "db.integrity_error",
        extra=log_context(
            path=str(request.url.path),
            method=request.method,
            detail=str(exc.orig) if exc.orig is not None else str(exc),
        ),
    )
    return _problem_response(
        request=request,
        status_code=status.HTTP_409_CONFLICT,
        detail="The request conflicts with existing data.",
        errors=None,
        error_type=problem_type(409)[0],
    )


__all__ = [
    "api_error_handler",
    "domain_error_handler",
    "http_exception_handler",
    "integrity_error_handler",
    "request_validation_exception_handler",
    "unhandled_exception_handler",
]
