from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from shop_db.models import MailJob
from tests.api.integration.conftest import SeededIdentity
from tests.utils import bearer, register

pytestmark = pytest.mark.asyncio


async def test_read_settings_grouped_by_section(
    async_client: AsyncClient,
    admin_token: str,
) -> None:
    response = await async_client.get("/api/admin/settings", headers=bearer(admin_token))

    assert response.status_code == 200
    groups = response.json()["settings"]
    assert groups["commerce"] == {"default_currency": "₺"}
    assert groups["localization"]["default_timezone"] == "Europe/Istanbul"
    assert groups["system"]["maintenance_mode"] is False
    assert groups["ui"]["items_per_page"] == 20
    assert groups["notification"]["email_notifications_enabled"] is True


async def test_update_settings_casts_values(
    async_client: AsyncClient,
    admin_token: str,
) -> None:
    response = await async_client.put(
        "/api/admin/settings",
        headers=bearer(admin_token),
        json={"settings": {"maintenance_mode": "true", "items_per_page": "50"}},
    )

    assert response.status_code == 200, response.text
    groups = response.json()["settings"]
    assert groups["system"]["maintenance_mode"] is True
    assert groups["ui"]["items_per_page"] == 50

    status = await async_client.get(
        "/api/admin/settings/system-status",
        headers=bearer(admin_token),
    )
    assert status.json() == {
        "maintenance_mode": True,
        "registration_enabled": True,
        "email_notifications": True,
        "sms_notifications": False,
    }


async def test_update_rejects_unknown_keys_and_bad_values(
    async_client: AsyncClient,
    admin_token: str,
) -> None:
    unknown = await async_client.put(
        "/api/admin/settings",
        headers=bearer(admin_token),
        json={"settings": {"favourite_colour": "blue"}},
    )
    assert unknown.status_code == 422
    assert unknown.json()["errors"] == [
        {
            "path": "settings.favourite_colour",
            "message": "Unknown setting key.",
            "code": "unknown_setting",
        }
    ]

    invalid = await async_client.put(
        "/api/admin/settings",
        headers=bearer(admin_token),
        json={"settings": {"items_per_page": "lots", "maintenance_mode": "maybe"}},
    )
    assert invalid.status_code == 422
    paths = {item["path"] for item in invalid.json()["errors"]}
    assert paths == {"settings.items_per_page", "settings.maintenance_mode"}

    unchanged = await async_client.get("/api/admin/settings", headers=bearer(admin_token))
    assert unchanged.json()["settings"]["ui"]["items_per_page"] == 20


async def test_disabling_email_notifications_stops_queueing(
    async_client: AsyncClient,
    admin_token: str,
    session_factory: sessionmaker[Session],
) -> None:
    response = await async_client.put(
        "/api/admin/settings",
        headers=bearer(admin_token),
        json={"settings": {"email_notifications_enabled": False}},
    )
    assert response.status_code == 200

    await register(async_client, email="quiet@example.com")

    with session_factory() as session:
        assert session.execute(select(func.count(MailJob.id))).scalar_one() == 0


async def test_settings_require_settings_permission(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
    customer_token: str,
) -> None:
    response = await async_client.get("/api/admin/settings", headers=bearer(customer_token))

    assert response.status_code == 403
