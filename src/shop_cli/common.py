"""Shared helpers for shop CLI command modules."""

from __future__ import annotations

import subprocess
from collections.abc import Iterable
from pathlib import Path

import typer
from dotenv import load_dotenv

from shop_common.paths import REPO_ROOT

LOCAL_ENV_PATH = REPO_ROOT / ".env"


def load_local_env(path: Path | None = None) -> bool:
    """Load ``.env`` into the process environment without overriding real env vars."""

    target = path or LOCAL_ENV_PATH
    if not target.is_file():
        return False
    return load_dotenv(target, override=False)


def run(
    command: Iterable[str],
    *,
    cwd: Path | None = None,
    env: dict[str, str] | None = None,
) -> None:
    cmd_list = list(command)
    typer.echo(f"-> {' '.join(cmd_list)}", err=True)
    completed = subprocess.run(cmd_list, cwd=cwd, env=env, check=False)
    if completed.returncode != 0:
        raise typer.Exit(code=completed.returncode)


__all__ = ["LOCAL_ENV_PATH", "load_local_env", "run"]
