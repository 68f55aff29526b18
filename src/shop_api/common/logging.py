"""Logging configuration and helpers for the shop API.

Two output formats are supported: single-line console logs for development
and one-object-per-line JSON for production ingestion.

Helpers bind a request-scoped correlation ID and build consistent ``extra``
payloads. Everything uses the standard :mod:`logging` library.
"""

from __future__ import annotations

import json
import logging
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from shop_api.settings import Settings

# ---------------------------------------------------------------------------
# Context and constants
# ---------------------------------------------------------------------------

# Request-scoped correlation ID, set/cleared by RequestContextMiddleware.
_CORRELATION_ID: ContextVar[str | None] = ContextVar(
    "shop_api_correlation_id",
    default=None,
)

# Attributes that are already handled by logging and should not be copied into
# the extra key=value list.
_STANDARD_ATTRS: set[str] = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "asctime",
    "correlation_id",
    "taskName",
    "color_message",
}

_CONFIGURED_FLAG = "_shop_configured"
_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


class ConsoleLogFormatter(logging.Formatter):
    """Render log records as single-line console output.

    Example line:

        2026-03-02T10:15:00.302Z INFO  shop_api.features.orders.service [cid=1234abcd]
        orders.create.success order_id=... total_amount=1500
    """

    def __init__(self) -> None:
        fmt = "%(asctime)s %(levelname)-5s %(name)s [cid=%(correlation_id)s] %(message)s"
        super().__init__(fmt=fmt, datefmt=_TIME_FORMAT)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return _format_timestamp(record, datefmt)

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - std signature
        record.correlation_id = _resolve_correlation_id(record)
        base = super().format(record)

        extras = [
            f"{key}={_format_extra_value(value)}"
            for key, value in sorted(_record_extras(record).items())
        ]
        if extras:
            return f"{base} " + " ".join(extras)
        return base


class JsonLogFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def __init__(self, *, service: str = "shop-api") -> None:
        super().__init__()
        self._service = service

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return _format_timestamp(record, datefmt)

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - std signature
        cid = _resolve_correlation_id(record)
        record.correlation_id = cid
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "service": self._service,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": cid,
        }
        payload.update(_record_extras(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def setup_logging(settings: Settings, *, service: str = "shop-api") -> None:
    """Configure root logging for the process.

    Installs a single StreamHandler and sets the baseline level from
    ``settings.effective_api_log_level``. Uvicorn, Alembic and SQLAlchemy
    loggers propagate into the same root handler.
    """
    root_logger = logging.getLogger()

    level_name = settings.effective_api_log_level
    level = getattr(logging, level_name)

    configured = getattr(root_logger, _CONFIGURED_FLAG, False)
    if not configured or not root_logger.handlers:
        root_logger.handlers = [logging.StreamHandler()]
        setattr(root_logger, _CONFIGURED_FLAG, True)
    else:
        root_logger.handlers = [root_logger.handlers[0]]

    handler = root_logger.handlers[0]
    handler.setFormatter(_build_formatter(settings.log_format, service=service))
    root_logger.setLevel(level)

    for name in (
        "uvicorn",
        "uvicorn.error",
        "uvicorn.access",
        "shop_api.request",
        "alembic",
        "alembic.runtime.migration",
        "sqlalchemy",
        "sqlalchemy.engine",
        "sqlalchemy.pool",
    ):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True
        logger.disabled = False
        logger.setLevel(logging.NOTSET)

    logging.getLogger("uvicorn").setLevel(level)
    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("shop_api.request").setLevel(
        getattr(logging, settings.effective_request_log_level)
    )

    access_logger = logging.getLogger("uvicorn.access")
    if settings.access_log_enabled:
        access_logger.setLevel(getattr(logging, settings.effective_access_log_level))
    else:
        access_logger.propagate = False
        access_logger.disabled = True

    # SQL traces are opt-in via SHOP_DATABASE_LOG_LEVEL=INFO|DEBUG.
    db_level = getattr(logging, settings.database_log_level or "WARNING")
    for name in ("sqlalchemy", "sqlalchemy.engine", "sqlalchemy.pool"):
        logging.getLogger(name).setLevel(db_level)


# ---------------------------------------------------------------------------
# Context helpers
# ---------------------------------------------------------------------------


def bind_request_context(correlation_id: str | None) -> None:
    """Bind a correlation ID to the logging context for the current request."""
    _CORRELATION_ID.set(correlation_id)


def clear_request_context() -> None:
    _CORRELATION_ID.set(None)


def current_request_id() -> str | None:
    return _CORRELATION_ID.get()


def log_context(
    *,
    user_id: UUID | str | None = None,
    order_id: UUID | str | None = None,
    product_id: UUID | str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a consistent ``extra`` payload for structured logs.

    Example:
        logger.info(
            "orders.create.success",
            extra=log_context(order_id=order.id, user_id=user.id),
        )
    """
    ctx: dict[str, Any] = {}

    if user_id is not None:
        ctx["user_id"] = str(user_id)
    if order_id is not None:
        ctx["order_id"] = str(order_id)
    if product_id is not None:
        ctx["product_id"] = str(product_id)

    for key, value in extra.items():
        ctx[key] = value

    return ctx


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _resolve_correlation_id(record: logging.LogRecord) -> str:
    return getattr(record, "correlation_id", None) or _CORRELATION_ID.get() or "-"


def _format_timestamp(record: logging.LogRecord, datefmt: str | None) -> str:
    dt = datetime.fromtimestamp(record.created, tz=UTC)
    base = dt.strftime(datefmt or _TIME_FORMAT)
    return f"{base}.{int(record.msecs):03d}Z"


def _format_extra_value(value: Any) -> str:
    if value is None:
        return "null"
    return str(value)


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    extras: dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_ATTRS or key.startswith("_"):
            continue
        extras[key] = value
    return extras


def _build_formatter(log_format: str, *, service: str) -> logging.Formatter:
    if log_format == "json":
        return JsonLogFormatter(service=service)
    return ConsoleLogFormatter()


__all__ = [
    "ConsoleLogFormatter",
    "JsonLogFormatter",
    "bind_request_context",
    "clear_request_context",
    "current_request_id",
    "log_context",
    "setup_logging",
]
