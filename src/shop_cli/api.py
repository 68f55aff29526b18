"""`shop api` command implementations."""

from __future__ import annotations

import os
import sys

import typer

from shop_api.settings import Settings

from .common import run

app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    help="Shop API CLI (start).",
)


@app.callback()
def _main(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def build_uvicorn_command(
    settings: Settings,
    *,
    host: str | None = None,
    port: int | None = None,
    reload: bool = False,
) -> list[str]:
    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "shop_api.main:create_app",
        "--factory",
        "--host",
        host or settings.api_host,
        "--port",
        str(port or settings.api_port),
        "--log-level",
        settings.effective_api_log_level.lower(),
    ]
    if not settings.access_log_enabled:
        cmd.append("--no-access-log")
    if reload:
        cmd.extend(["--reload", "--reload-dir", "src"])
    return cmd


@app.command(name="start", help="Start the shop API server.")
def start(
    host: str | None = typer.Option(None, "--host", help="Bind address."),
    port: int | None = typer.Option(None, "--port", help="Bind port."),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes."),
) -> None:
    settings = Settings()
    cmd = build_uvicorn_command(settings, host=host, port=port, reload=reload)
    bind = f"{host or settings.api_host}:{port or settings.api_port}"
    typer.echo(f"Starting shop API on http://{bind}")
    run(cmd, env=os.environ.copy())


__all__ = ["app", "build_uvicorn_command"]
