from __future__ import annotations

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from shop_api.common.time import utc_now
from shop_db.models import ApplicationSetting, MailJob, SettingGroup, SettingType, User
from tests.api.integration.conftest import SeededIdentity
from tests.utils import CSRF_COOKIE, bearer, login, register

pytestmark = pytest.mark.asyncio


async def test_register_creates_customer_and_queues_welcome_mail(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
    session_factory: sessionmaker[Session],
) -> None:
    token, payload = await register(async_client, email="New.Person@Example.com")

    assert token
    assert payload["token_type"] == "Bearer"
    assert payload["user"]["user_type"] == "user"
    assert payload["user"]["country"]["code"] == "TR"

    profile = await async_client.get("/api/profile", headers=bearer(token))
    assert profile.status_code == 200
    assert profile.json()["email"] == "New.Person@example.com"

    with session_factory() as session:
        jobs = session.execute(select(MailJob)).scalars().all()
        assert [job.template for job in jobs] == ["welcome"]
        assert jobs[0].recipient == "New.Person@example.com"
        assert jobs[0].status == "queued"


async def test_register_rejects_duplicate_email_case_insensitively(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
) -> None:
    response = await async_client.post(
        "/api/auth/register",
        json={
            "name": "Duplicate",
            "email": "AYSE@example.com",
            "password": "another-password",
            "password_confirmation": "another-password",
            "country_code": "TR",
        },
    )

    assert response.status_code == 422
    body = response.json()
    assert body["type"] == "validation_error"
    assert body["errors"][0]["path"] == "email"
    assert body["errors"][0]["code"] == "email_taken"


async def test_register_validates_password_rules(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
) -> None:
    response = await async_client.post(
        "/api/auth/register",
        json={
            "name": "Short Pass",
            "email": "short@example.com",
            "password": "short",
            "password_confirmation": "different",
            "country_code": "TR",
        },
    )

    assert response.status_code == 422
    codes = {item["code"] for item in response.json()["errors"]}
    assert codes == {"password_too_short", "password_mismatch"}


async def test_register_rejects_unknown_country(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
) -> None:
    response = await async_client.post(
        "/api/auth/register",
        json={
            "name": "Traveller",
            "email": "traveller@example.com",
            "password": "long-enough-1",
            "password_confirmation": "long-enough-1",
            "country_code": "FR",
        },
    )

    assert response.status_code == 422
    assert response.json()["errors"][0]["path"] == "country_code"


async def test_register_blocked_when_registration_setting_is_off(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
    session_factory: sessionmaker[Session],
) -> None:
    with session_factory() as session, session.begin():
        row = ApplicationSetting(
            key="registration_enabled",
            type=SettingType.BOOLEAN,
            group=SettingGroup.SYSTEM,
            is_active=True,
        )
        row.typed_value = False
        session.add(row)

    response = await async_client.post(
        "/api/auth/register",
        json={
            "name": "Blocked",
            "email": "blocked@example.com",
            "password": "long-enough-1",
            "password_confirmation": "long-enough-1",
            "country_code": "US",
        },
    )

    assert response.status_code == 403
    assert response.json()["detail"] == "Registration is currently disabled."


async def test_login_returns_token_and_sets_cookies(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
) -> None:
    _, payload = await login(
        async_client,
        email=seeded_identity.customer.email,
        password=seeded_identity.customer.password,
        keep_cookies=True,
    )

    assert payload["user"]["email"] == seeded_identity.customer.email
    assert async_client.cookies.get("shop_session") == payload["token"]
    assert async_client.cookies.get(CSRF_COOKIE)


async def test_login_with_wrong_password_is_unauthorized(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
) -> None:
    response = await async_client.post(
        "/api/auth/login",
        json={"email": seeded_identity.customer.email, "password": "nope-nope"},
    )

    assert response.status_code == 401
    assert response.headers["content-type"].startswith("application/problem+json")


async def test_repeated_failures_lock_the_account(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
    session_factory: sessionmaker[Session],
) -> None:
    credentials = {"email": seeded_identity.customer.email, "password": "wrong-password"}
    for _ in range(3):
        failed = await async_client.post("/api/auth/login", json=credentials)
        assert failed.status_code == 401

    locked = await async_client.post(
        "/api/auth/login",
        json={
            "email": seeded_identity.customer.email,
            "password": seeded_identity.customer.password,
        },
    )
    assert locked.status_code == 423
    assert locked.json()["type"] == "locked"

    with session_factory() as session:
        user = session.get(User, seeded_identity.customer.id)
        assert user is not None
        assert user.failed_login_count == 3
        assert user.locked_until is not None


async def test_failure_after_lock_expires_starts_a_new_window(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
    session_factory: sessionmaker[Session],
) -> None:
    credentials = {"email": seeded_identity.customer.email, "password": "wrong-password"}
    for _ in range(3):
        failed = await async_client.post("/api/auth/login", json=credentials)
        assert failed.status_code == 401

    with session_factory() as session, session.begin():
        user = session.get(User, seeded_identity.customer.id)
        assert user is not None
        user.locked_until = utc_now() - timedelta(seconds=1)

    retry = await async_client.post("/api/auth/login", json=credentials)
    assert retry.status_code == 401

    with session_factory() as session:
        user = session.get(User, seeded_identity.customer.id)
        assert user is not None
        assert user.failed_login_count == 1
        assert user.locked_until is None

    token, _ = await login(
        async_client,
        email=seeded_identity.customer.email,
        password=seeded_identity.customer.password,
    )
    assert token


async def test_inactive_user_cannot_login(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
    session_factory: sessionmaker[Session],
) -> None:
    with session_factory() as session, session.begin():
        user = session.get(User, seeded_identity.other_customer.id)
        assert user is not None
        user.is_active = False

    response = await async_client.post(
        "/api/auth/login",
        json={
            "email": seeded_identity.other_customer.email,
            "password": seeded_identity.other_customer.password,
        },
    )
    assert response.status_code == 403


async def test_logout_revokes_bearer_token(
    async_client: AsyncClient,
    customer_token: str,
) -> None:
    response = await async_client.post("/api/auth/logout", headers=bearer(customer_token))
    assert response.status_code == 204

    after = await async_client.get("/api/profile", headers=bearer(customer_token))
    assert after.status_code == 401
    assert after.headers["www-authenticate"] == "Bearer"


async def test_cookie_session_requires_csrf_header_for_writes(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
) -> None:
    await login(
        async_client,
        email=seeded_identity.customer.email,
        password=seeded_identity.customer.password,
        keep_cookies=True,
    )

    profile = await async_client.get("/api/profile")
    assert profile.status_code == 200

    blocked = await async_client.post("/api/auth/logout")
    assert blocked.status_code == 403
    assert blocked.json()["detail"] == "CSRF token missing or invalid."
    assert blocked.json()["type"] == "csrf_failed"

    csrf = async_client.cookies.get(CSRF_COOKIE)
    assert csrf
    allowed = await async_client.post("/api/auth/logout", headers={"X-CSRF-Token": csrf})
    assert allowed.status_code == 204


async def test_protected_routes_require_authentication(async_client: AsyncClient) -> None:
    response = await async_client.get("/api/cart")

    assert response.status_code == 401
    assert response.json()["type"] == "unauthorized"
