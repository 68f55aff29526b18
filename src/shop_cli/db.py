"""`shop db` and `shop seed` command implementations."""

from __future__ import annotations

import typer
from sqlalchemy.engine import make_url

from shop_db.migrations_runner import current_revision, run_migrations
from shop_db.settings import Settings

app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    help="Database CLI (migrate, current).",
)


@app.callback()
def _main(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command(name="migrate", help="Upgrade the database schema.")
def migrate(
    revision: str = typer.Option("head", "--revision", "-r", help="Target revision."),
) -> None:
    settings = Settings()
    safe_url = make_url(settings.database_url).render_as_string(hide_password=True)
    typer.echo(f"Migrating {safe_url} to {revision}")
    run_migrations(settings, revision=revision)
    typer.echo("Migrations complete.")


@app.command(name="current", help="Show the current schema revision.")
def current() -> None:
    typer.echo(current_revision(Settings()) or "<none>")


def seed() -> None:
    """Insert reference currencies, countries, languages, shipping methods and settings."""

    from shop_api.app.bootstrap import seed_reference_data
    from shop_db.engine import build_engine, build_sessionmaker, session_scope

    engine = build_engine(Settings())
    try:
        with session_scope(build_sessionmaker(engine)) as session:
            report = seed_reference_data(session)
    finally:
        engine.dispose()
    typer.echo(
        "Seeded "
        f"{report.currencies} currencies, {report.countries} countries, "
        f"{report.languages} languages, {report.shipping_methods} shipping methods, "
        f"{report.settings} settings."
    )


__all__ = ["app", "seed"]
