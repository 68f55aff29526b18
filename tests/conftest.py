"""Shared fixtures: a migrated SQLite database per test."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from shop_api.app.lifecycles import ensure_runtime_dirs
from shop_api.settings import Settings
from shop_db.engine import build_engine, build_sessionmaker
from shop_db.migrations_runner import run_migrations


def build_test_settings(root: Path, **overrides: object) -> Settings:
    values: dict[str, object] = {
        "database_url": f"sqlite:///{(root / 'shop.sqlite').as_posix()}",
        "storage_path": root / "storage",
        "log_level": "WARNING",
        "failed_login_lock_threshold": 3,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(autouse=True)
def _clear_shop_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep tests deterministic regardless of shell exports.
    for key in list(os.environ):
        if key.startswith("SHOP_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    settings = build_test_settings(tmp_path)
    ensure_runtime_dirs(settings)
    run_migrations(settings)
    return settings


@pytest.fixture()
def engine(settings: Settings) -> Iterator[Engine]:
    engine = build_engine(settings)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return build_sessionmaker(engine)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    with session_factory() as session:
        yield session
