"""FastAPI dependencies that bridge HTTP requests to the auth foundation."""

from __future__ import annotations

import secrets
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Header, Request, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from shop_api.common.problem_details import ApiError
from shop_api.common.time import utc_now
from shop_api.db import get_db_read
from shop_api.settings import Settings, get_settings
from shop_db.events import set_actor
from shop_db.models import AuthSession, User

from ..auth import (
    AuthenticatedPrincipal,
    AuthenticationError,
    AuthVia,
    PermissionDeniedError,
    authenticate_request,
)
from ..auth.permissions import has_permission
from ..security.tokens import hash_opaque_token

ReadSessionDep = Annotated[Session, Depends(get_db_read)]
SettingsDep = Annotated[Settings, Depends(get_settings)]

PermissionDependency = Callable[..., User]


class SessionTokenAuthenticator:
    """Resolve opaque tokens against the ``auth_sessions`` table."""

    def __init__(self, *, session: Session) -> None:
        self._session = session

    def authenticate(self, token: str, *, via: AuthVia) -> AuthenticatedPrincipal | None:
        candidate = (token or "").strip()
        if not candidate:
            return None

        token_hash = hash_opaque_token(candidate)
        stmt = (
            select(AuthSession)
            .where(AuthSession.token_hash == token_hash)
            .where(AuthSession.revoked_at.is_(None))
            .limit(1)
        )
        auth_session = self._session.execute(stmt).scalar_one_or_none()
        if auth_session is None:
            return None

        expires_at = auth_session.expires_at
        if expires_at is not None and expires_at <= utc_now():
            return None

        return AuthenticatedPrincipal(
            user_id=auth_session.user_id,
            auth_via=via,
            token_hash=token_hash,
        )


def get_token_authenticator(db: ReadSessionDep) -> SessionTokenAuthenticator:
    return SessionTokenAuthenticator(session=db)


def get_current_principal(
    request: Request,
    db: ReadSessionDep,
    settings: SettingsDep,
    token_service: Annotated[SessionTokenAuthenticator, Depends(get_token_authenticator)],
) -> AuthenticatedPrincipal:
    """Authenticate the incoming request and return the current principal."""

    principal = authenticate_request(
        request=request,
        db=db,
        settings=settings,
        token_service=token_service,
    )
    request.state.user_id = principal.user_id
    return principal


def require_authenticated(
    principal: Annotated[AuthenticatedPrincipal, Depends(get_current_principal)],
    db: ReadSessionDep,
) -> User:
    """Ensure the request is authenticated and return the persisted user."""

    user = db.get(User, principal.user_id)
    if user is None:
        raise AuthenticationError("Unknown principal")
    if not user.is_active:
        raise AuthenticationError("User account is inactive.")
    set_actor(db, user.id)
    return user


def get_optional_user(
    request: Request,
    db: ReadSessionDep,
    settings: SettingsDep,
    token_service: Annotated[SessionTokenAuthenticator, Depends(get_token_authenticator)],
) -> User | None:
    """Return the caller when credentials are present and valid, else ``None``."""

    try:
        principal = authenticate_request(
            request=request,
            db=db,
            settings=settings,
            token_service=token_service,
        )
    except AuthenticationError:
        return None
    user = db.get(User, principal.user_id)
    if user is not None:
        set_actor(db, user.id)
    return user


def require_permission(permission_key: str) -> PermissionDependency:
    """Return a dependency enforcing a specific permission."""

    def dependency(
        user: Annotated[User, Depends(require_authenticated)],
    ) -> User:
        if not has_permission(user, permission_key):
            raise PermissionDeniedError(permission_key)
        return user

    return dependency


_SAFE_METHODS = {"GET", "HEAD", "OPTIONS", "TRACE"}


def require_csrf(
    request: Request,
    settings: SettingsDep,
    principal: Annotated[AuthenticatedPrincipal, Depends(get_current_principal)],
    csrf_token: Annotated[str | None, Header(alias="X-CSRF-Token")] = None,
) -> None:
    """Enforce double-submit CSRF protection for cookie-authenticated requests.

    Bearer-token requests skip this guard since browsers never attach them
    automatically.
    """

    if request.method.upper() in _SAFE_METHODS:
        return

    if principal.auth_via is AuthVia.BEARER:
        return

    cookie_csrf = (request.cookies.get(settings.session_csrf_cookie_name) or "").strip()
    header_csrf = (csrf_token or "").strip()

    if not cookie_csrf or not header_csrf or not secrets.compare_digest(cookie_csrf, header_csrf):
        raise ApiError(
            error_type="csrf_failed",
            status_code=status.HTTP_403_FORBIDDEN,
            detail="CSRF token missing or invalid.",
        )


__all__ = [
    "PermissionDependency",
    "SessionTokenAuthenticator",
    "get_current_principal",
    "get_optional_user",
    "get_token_authenticator",
    "require_authenticated",
    "require_csrf",
    "require_permission",
]
