"""Helper functions shared across tests."""

from __future__ import annotations

from typing import Any

from httpx import AsyncClient

SESSION_COOKIE = "shop_session"
CSRF_COOKIE = "shop_csrf"


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def login(
    client: AsyncClient,
    *,
    email: str,
    password: str,
    keep_cookies: bool = False,
) -> tuple[str, dict[str, Any]]:
    """Authenticate ``email``/``password`` returning (bearer_token, payload).

    Cookies set by the login response are dropped unless ``keep_cookies`` is
    true, so later requests authenticate only with the bearer token.
    """

    response = await client.post(
        "/api/auth/login",
        json={"email": email, "password": password},
    )
    assert response.status_code == 200, response.text
    payload = response.json()
    if not keep_cookies:
        client.cookies.clear()
    return payload["token"], payload


async def register(
    client: AsyncClient,
    *,
    email: str,
    password: str = "correct-horse-1",
    name: str = "New Customer",
    country_code: str = "TR",
) -> tuple[str, dict[str, Any]]:
    response = await client.post(
        "/api/auth/register",
        json={
            "name": name,
            "email": email,
            "password": password,
            "password_confirmation": password,
            "country_code": country_code,
        },
    )
    assert response.status_code == 201, response.text
    client.cookies.clear()
    payload = response.json()
    return payload["token"], payload


__all__ = ["CSRF_COOKIE", "SESSION_COOKIE", "bearer", "login", "register"]
