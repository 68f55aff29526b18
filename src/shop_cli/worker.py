"""`shop worker` command implementations."""

from __future__ import annotations

import typer

app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    help="Mail worker CLI (start).",
)


@app.callback()
def _main(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command(name="start", help="Start the mail worker.")
def start(
    once: bool = typer.Option(False, "--once", help="Process one batch and exit."),
) -> None:
    from shop_worker.loop import main as worker_main

    raise typer.Exit(code=worker_main(once=once))


__all__ = ["app"]
