"""FastAPI lifespan helpers for the shop application."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio.to_thread
from fastapi import FastAPI
from fastapi.routing import Lifespan
from sqlalchemy import text
from sqlalchemy.engine import make_url

from shop_api.common.logging import log_context
from shop_api.common.time import utc_now
from shop_api.db import get_engine_from_app, get_session_factory_from_app, init_db, shutdown_db
from shop_api.features.app_settings.repository import ApplicationSettingsRepository
from shop_api.settings import Settings
from shop_db.migrations_runner import run_migrations

logger = logging.getLogger(__name__)


def ensure_runtime_dirs(settings: Settings) -> None:
    """Create runtime directories required by the application."""

    settings.storage_path.mkdir(parents=True, exist_ok=True)


def _configure_threadpool_tokens(*, tokens: int) -> tuple[int, int]:
    limiter = anyio.to_thread.current_default_thread_limiter()
    previous = int(limiter.total_tokens)
    limiter.total_tokens = int(tokens)
    return previous, int(limiter.total_tokens)


def create_application_lifespan(
    *,
    settings: Settings,
) -> Lifespan[FastAPI]:
    """Return the FastAPI lifespan handler used by the app factory."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        ensure_runtime_dirs(settings)
        app.state.settings = settings
        app.state.started_at = utc_now()
        previous_tokens, configured_tokens = _configure_threadpool_tokens(
            tokens=int(settings.api_threadpool_tokens)
        )
        logger.info(
            "api.threadpool.configured",
            extra={"tokens": configured_tokens, "previous_tokens": previous_tokens},
        )

        logger.info(
            "shop_api.startup",
            extra=log_context(
                logging_level=settings.effective_api_log_level,
                version=settings.app_version,
            ),
        )

        safe_url = make_url(str(settings.database_url)).render_as_string(hide_password=True)
        if settings.database_migrate_on_startup:
            logger.info("db.migrate.start", extra={"database_url": safe_url})
            await asyncio.to_thread(run_migrations, settings)
            logger.info("db.migrate.complete", extra={"database_url": safe_url})

        logger.info("db.init.start", extra={"database_url": safe_url})
        init_db(app, settings)
        logger.info("db.init.complete", extra={"database_url": safe_url})

        engine = get_engine_from_app(app)
        session_factory = get_session_factory_from_app(app)

        def _check_db_connection() -> None:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))

        def _check_schema() -> None:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1 FROM alembic_version"))

        def _ensure_default_settings() -> int:
            with session_factory() as session:
                with session.begin():
                    return ApplicationSettingsRepository(session).ensure_defaults()

        try:
            try:
                await asyncio.to_thread(_check_db_connection)
            except Exception as exc:
                logger.error(
                    "db.connection.failed",
                    extra={"database_url": safe_url},
                    exc_info=True,
                )
                raise RuntimeError(
                    "Database is not reachable. Verify SHOP_DATABASE_URL and credentials."
                ) from exc

            # Fail fast if the schema hasn't been migrated.
            try:
                await asyncio.to_thread(_check_schema)
            except Exception as exc:
                logger.error(
                    "db.schema.missing",
                    extra={"database_url": safe_url},
                    exc_info=True,
                )
                raise RuntimeError(
                    "Database schema is not initialized. "
                    "Run `shop db migrate` before starting the API."
                ) from exc

            created = await asyncio.to_thread(_ensure_default_settings)
            if created:
                logger.info("app_settings.defaults.seeded", extra={"created": created})

            yield
        finally:
            shutdown_db(app)

    return lifespan


__all__ = ["create_application_lifespan", "ensure_runtime_dirs"]
