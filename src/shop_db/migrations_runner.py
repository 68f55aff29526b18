"""Programmatic Alembic runner for shop migrations."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from importlib import resources

from alembic import command
from alembic.config import Config

from .settings import DatabaseSettings, get_settings

__all__ = ["alembic_config", "current_revision", "downgrade", "run_migrations"]


@contextmanager
def alembic_config(settings: DatabaseSettings | None = None) -> Iterator[Config]:
    migrations_ref = resources.files("shop_db") / "migrations"
    with resources.as_file(migrations_ref) as migrations_dir:
        if not migrations_dir.exists():
            raise FileNotFoundError(f"Alembic migrations not found at {migrations_dir}")

        alembic_cfg = Config()
        alembic_cfg.set_main_option("script_location", str(migrations_dir))
        resolved = settings or get_settings()
        if not resolved.database_url:
            raise ValueError("Settings.database_url is required.")
        alembic_cfg.attributes["settings"] = resolved
        alembic_cfg.attributes["configure_logger"] = False
        # ConfigParser treats % as interpolation; escape to preserve URL encoding.
        safe_url = str(resolved.database_url).replace("%", "%%")
        alembic_cfg.set_main_option("sqlalchemy.url", safe_url)
        yield alembic_cfg


def run_migrations(settings: DatabaseSettings | None = None, *, revision: str = "head") -> None:
    with alembic_config(settings) as alembic_cfg:
        command.upgrade(alembic_cfg, revision)


def downgrade(settings: DatabaseSettings | None = None, *, revision: str = "base") -> None:
    with alembic_config(settings) as alembic_cfg:
        command.downgrade(alembic_cfg, revision)


def current_revision(settings: DatabaseSettings | None = None) -> str | None:
    from alembic.runtime.migration import MigrationContext

    from .engine import build_engine

    engine = build_engine(settings)
    try:
        with engine.connect() as connection:
            return MigrationContext.configure(connection).get_current_revision()
    finally:
        engine.dispose()
