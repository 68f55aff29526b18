"""Request middleware: correlation IDs, request logs and CORS."""

from __future__ import annotations

import logging
import re
import time
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from shop_api.settings import Settings, get_settings

from .logging import bind_request_context, clear_request_context, log_context

REQUEST_ID_HEADER = "X-Request-ID"
CSRF_HEADER = "X-CSRF-Token"

_REQUEST_LOGGER = logging.getLogger("shop_api.request")
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def resolve_request_id(raw: str | None) -> str:
    """Reuse a caller's request ID when it is a short token, else mint one."""

    candidate = (raw or "").strip()
    if _REQUEST_ID_PATTERN.match(candidate):
        return candidate
    return uuid4().hex


def _level_for(status_code: int | None) -> int:
    if status_code is None or status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a correlation ID per request and log one line when it finishes.

    The log line carries the authenticated user when an auth dependency ran.
    Client errors log at WARNING and server errors at ERROR.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        correlation_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.correlation_id = correlation_id
        bind_request_context(correlation_id)

        start = time.perf_counter()
        status_code: int | None = None
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            # Tracebacks for unhandled errors come from the 500 handler.
            _REQUEST_LOGGER.log(
                _level_for(status_code),
                "request.complete" if status_code is not None else "request.error",
                extra=log_context(
                    user_id=getattr(request.state, "user_id", None),
                    method=request.method,
                    path=request.url.path,
                    status_code=status_code,
                    duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
                ),
            )
            clear_request_context()

        response.headers[REQUEST_ID_HEADER] = correlation_id
        return response


def register_middleware(app: FastAPI, *, settings: Settings | None = None) -> None:
    settings = settings or get_settings()

    if settings.server_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.server_cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["Authorization", "Content-Type", CSRF_HEADER, REQUEST_ID_HEADER],
            expose_headers=[REQUEST_ID_HEADER],
        )

    app.add_middleware(RequestContextMiddleware)


__all__ = ["RequestContextMiddleware", "register_middleware", "resolve_request_id"]
