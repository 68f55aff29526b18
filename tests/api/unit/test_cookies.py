from __future__ import annotations

import pytest
from fastapi import Response

from shop_api.core.http.cookies import clear_auth_cookies, cookie_is_secure, set_auth_cookies
from shop_api.settings import Settings


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"public_web_url": "http://localhost:3000"}, False),
        ({"public_web_url": "https://shop.example.com"}, True),
        ({"public_web_url": "https://shop.example.com", "session_cookie_secure": False}, False),
        ({"public_web_url": "http://localhost:3000", "session_cookie_secure": True}, True),
        ({"public_web_url": "http://localhost:3000", "session_cookie_samesite": "none"}, True),
    ],
)
def test_cookie_security_follows_settings(overrides: dict, expected: bool) -> None:
    assert cookie_is_secure(Settings(_env_file=None, **overrides)) is expected


def test_auth_cookies_share_attributes() -> None:
    settings = Settings(
        _env_file=None,
        public_web_url="https://shop.example.com",
        session_cookie_samesite="strict",
    )
    response = Response()

    csrf = set_auth_cookies(response, settings, "session-token")

    headers = response.headers.getlist("set-cookie")
    session_header = next(h for h in headers if h.startswith("shop_session="))
    csrf_header = next(h for h in headers if h.startswith("shop_csrf="))
    assert session_header.startswith("shop_session=session-token;")
    assert csrf_header.startswith(f"shop_csrf={csrf};")
    assert "HttpOnly" in session_header
    assert "HttpOnly" not in csrf_header
    for header in (session_header, csrf_header):
        assert "Secure" in header
        assert "SameSite=strict" in header


def test_clear_auth_cookies_expires_both() -> None:
    response = Response()

    clear_auth_cookies(response, Settings(_env_file=None))

    headers = response.headers.getlist("set-cookie")
    assert [h.split("=", 1)[0] for h in headers] == ["shop_session", "shop_csrf"]
    assert all("Max-Age=0" in h for h in headers)
