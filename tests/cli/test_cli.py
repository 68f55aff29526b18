from __future__ import annotations

import os
import sys

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker
from typer.testing import CliRunner

from shop_api.settings import Settings
from shop_cli.api import build_uvicorn_command
from shop_cli.common import load_local_env
from shop_cli.main import app
from shop_db.models import Currency, MailJob, ShippingMethod, User, UserType
from shop_worker.settings import reload_settings

runner = CliRunner()


@pytest.fixture()
def database_env(settings: Settings, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHOP_DATABASE_URL", settings.database_url)


def test_root_help_lists_command_groups() -> None:
    result = runner.invoke(app, [])

    assert result.exit_code == 0
    for group in ("db", "seed", "users", "api", "worker"):
        assert group in result.output


def test_build_uvicorn_command() -> None:
    settings = Settings(_env_file=None, api_log_level="DEBUG", access_log_enabled=False)

    cmd = build_uvicorn_command(settings, port=9001, reload=True)

    assert cmd[:5] == [sys.executable, "-m", "uvicorn", "shop_api.main:create_app", "--factory"]
    assert cmd[cmd.index("--host") + 1] == "0.0.0.0"
    assert cmd[cmd.index("--port") + 1] == "9001"
    assert cmd[cmd.index("--log-level") + 1] == "debug"
    assert "--no-access-log" in cmd
    assert cmd[-3:] == ["--reload", "--reload-dir", "src"]


def test_seed_is_idempotent(
    database_env: None,
    session_factory: sessionmaker[Session],
) -> None:
    first = runner.invoke(app, ["seed"])
    second = runner.invoke(app, ["seed"])

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    assert "Seeded 0 currencies, 0 countries, 0 languages" in second.output
    with session_factory() as session:
        assert session.execute(select(func.count()).select_from(Currency)).scalar_one() == 2
        methods = session.execute(select(func.count()).select_from(ShippingMethod)).scalar_one()
        assert methods == 3


def test_create_admin(
    database_env: None,
    session_factory: sessionmaker[Session],
) -> None:
    args = [
        "users",
        "create-admin",
        "--email",
        "Root@Example.com",
        "--name",
        "Root Admin",
        "--password",
        "admin-password-1",
    ]

    created = runner.invoke(app, args)
    duplicate = runner.invoke(app, args)

    assert created.exit_code == 0, created.output
    assert "Created admin Root@Example.com" in created.output
    assert duplicate.exit_code == 1
    with session_factory() as session:
        admin = session.execute(
            select(User).where(User.email_normalized == "root@example.com")
        ).scalar_one()
        assert admin.user_type == UserType.ADMIN


def test_create_admin_rejects_short_password(database_env: None) -> None:
    result = runner.invoke(
        app,
        ["users", "create-admin", "--email", "a@example.com", "--name", "A", "--password", "x"],
    )

    assert result.exit_code == 1


def test_worker_start_once(
    database_env: None,
    session_factory: sessionmaker[Session],
) -> None:
    with session_factory() as session:
        session.add(
            MailJob(
                template="welcome",
                recipient="ayse@example.com",
                payload={
                    "name": "Ayse",
                    "email": "ayse@example.com",
                    "app_name": "Shop",
                    "app_url": "https://shop.test",
                },
            )
        )
        session.commit()
    reload_settings()

    result = runner.invoke(app, ["worker", "start", "--once"])

    assert result.exit_code == 0, result.output
    with session_factory() as session:
        job = session.execute(select(MailJob)).scalar_one()
        assert job.status == "sent"


def test_load_local_env_does_not_override(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("SHOP_API_PORT=9100\nSHOP_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    monkeypatch.setenv("SHOP_LOG_LEVEL", "ERROR")

    try:
        assert load_local_env(env_file) is True
        assert Settings(_env_file=None).api_port == 9100
        assert Settings(_env_file=None).log_level == "ERROR"
    finally:
        os.environ.pop("SHOP_API_PORT", None)
    assert load_local_env(tmp_path / "missing.env") is False
