"""Request authentication pipeline used by FastAPI dependencies."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from fastapi import Request
from sqlalchemy.orm import Session

from shop_api.settings import Settings
from shop_db.models import User

from .errors import AuthenticationError
from .principal import AuthenticatedPrincipal, AuthVia


@runtime_checkable
class TokenAuthenticator(Protocol):
    """Interface for resolving opaque session tokens."""

    def authenticate(self, token: str, *, via: AuthVia) -> AuthenticatedPrincipal | None: ...


def _extract_bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization")
    if not header:
        return None
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    candidate = credentials.strip()
    return candidate or None


def _ensure_active_principal(
    *,
    principal: AuthenticatedPrincipal,
    session: Session,
) -> None:
    """Ensure the backing user exists and is active."""

    user = session.get(User, principal.user_id)
    if user is None:
        raise AuthenticationError("Unknown principal")
    if not user.is_active:
        raise AuthenticationError("User account is inactive.")


def authenticate_request(
    request: Request,
    db: Session,
    settings: Settings,
    token_service: TokenAuthenticator,
) -> AuthenticatedPrincipal:
    """Authenticate an incoming request to a principal.

    ``Authorization: Bearer`` wins over the session cookie when both are sent.
    """

    bearer = _extract_bearer_token(request)
    if bearer:
        principal = token_service.authenticate(bearer, via=AuthVia.BEARER)
        if principal is not None:
            _ensure_active_principal(principal=principal, session=db)
            return principal

    cookie_token = (request.cookies.get(settings.session_cookie_name) or "").strip()
    if cookie_token:
        principal = token_service.authenticate(cookie_token, via=AuthVia.SESSION)
        if principal is not None:
            _ensure_active_principal(principal=principal, session=db)
            return principal

    raise AuthenticationError("Authentication required")


__all__ = ["TokenAuthenticator", "authenticate_request"]
