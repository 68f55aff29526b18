"""Shop root CLI."""

from __future__ import annotations

from collections.abc import Sequence

import typer

from .api import app as api_app
from .common import load_local_env
from .db import app as db_app
from .db import seed
from .users import app as users_app
from .worker import app as worker_app

app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    help="Shop CLI (db, seed, users, api, worker).",
)


@app.callback()
def _main(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


app.add_typer(db_app, name="db")
app.add_typer(users_app, name="users")
app.add_typer(api_app, name="api")
app.add_typer(worker_app, name="worker")
app.command(name="seed", help="Insert reference data. Safe to run repeatedly.")(seed)


def run(argv: Sequence[str] | None = None) -> None:
    load_local_env()
    app(args=list(argv) if argv is not None else None)


__all__ = ["app", "run"]
