"""`shop users` command implementations."""

from __future__ import annotations

import typer
from sqlalchemy import select

from shop_db.engine import build_engine, build_sessionmaker, session_scope
from shop_db.models import User, UserType

app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    help="User administration CLI.",
)


@app.callback()
def _main(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command(name="create-admin", help="Create an administrator account.")
def create_admin(
    email: str = typer.Option(..., "--email", help="Login email."),
    name: str = typer.Option(..., "--name", help="Display name."),
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Initial password.",
    ),
) -> None:
    from shop_api.core.security.hashing import hash_password
    from shop_api.settings import Settings

    settings = Settings()
    if len(password) < settings.auth_password_min_length:
        typer.echo(
            f"error: password must be at least {settings.auth_password_min_length} characters.",
            err=True,
        )
        raise typer.Exit(code=1)

    engine = build_engine(settings)
    try:
        with session_scope(build_sessionmaker(engine)) as session:
            normalized = email.strip().lower()
            existing = session.execute(
                select(User).where(User.email_normalized == normalized)
            ).scalar_one_or_none()
            if existing is not None:
                typer.echo(f"error: a user with email {email} already exists.", err=True)
                raise typer.Exit(code=1)
            user = User(
                name=name,
                email=email,
                hashed_password=hash_password(password),
                user_type=UserType.ADMIN,
                is_active=True,
            )
            session.add(user)
            session.flush()
            user_id = user.id
    finally:
        engine.dispose()
    typer.echo(f"Created admin {email} ({user_id}).")


__all__ = ["app"]
