"""Browser session cookies.

A login sets two cookies with the same scope: the HttpOnly session token and a
readable CSRF value the storefront echoes back in ``X-CSRF-Token`` on writes.
"""

from __future__ import annotations

import secrets

from fastapi import Response

from shop_api.settings import Settings


def cookie_is_secure(settings: Settings) -> bool:
    """Whether auth cookies carry the ``Secure`` flag.

    An explicit ``session_cookie_secure`` wins. Otherwise the flag follows the
    scheme of ``public_web_url``. ``SameSite=None`` is always secure since
    browsers drop insecure cross-site cookies.
    """

    if settings.session_cookie_samesite == "none":
        return True
    if settings.session_cookie_secure is not None:
        return settings.session_cookie_secure
    return settings.public_web_url.lower().startswith("https://")


def _set(response: Response, settings: Settings, *, key: str, value: str, httponly: bool) -> None:
    response.set_cookie(
        key=key,
        value=value,
        max_age=int(settings.session_access_ttl.total_seconds()),
        path=settings.session_cookie_path or "/",
        domain=settings.session_cookie_domain,
        secure=cookie_is_secure(settings),
        httponly=httponly,
        samesite=settings.session_cookie_samesite,
    )


def set_auth_cookies(response: Response, settings: Settings, token: str) -> str:
    """Attach the session and CSRF cookies; returns the CSRF value."""

    csrf_token = secrets.token_urlsafe(32)
    _set(response, settings, key=settings.session_cookie_name, value=token, httponly=True)
    _set(
        response,
        settings,
        key=settings.session_csrf_cookie_name,
        value=csrf_token,
        httponly=False,
    )
    return csrf_token


def clear_auth_cookies(response: Response, settings: Settings) -> None:
    for key in (settings.session_cookie_name, settings.session_csrf_cookie_name):
        response.delete_cookie(
            key,
            path=settings.session_cookie_path or "/",
            domain=settings.session_cookie_domain,
        )


__all__ = ["clear_auth_cookies", "cookie_is_secure", "set_auth_cookies"]
