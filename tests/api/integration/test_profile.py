from __future__ import annotations

import pytest
from httpx import AsyncClient

from tests.api.integration.conftest import SeededCatalog, SeededIdentity
from tests.utils import bearer

pytestmark = pytest.mark.asyncio


async def test_read_profile_includes_country(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
    customer_token: str,
) -> None:
    response = await async_client.get("/api/profile", headers=bearer(customer_token))

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == seeded_identity.customer.email
    assert body["user_type"] == "user"
    assert body["country"]["code"] == "TR"
    assert "hashed_password" not in body


async def test_update_name_and_email(
    async_client: AsyncClient,
    customer_token: str,
) -> None:
    response = await async_client.put(
        "/api/profile",
        headers=bearer(customer_token),
        json={"name": "  Ayse Demir ", "email": "ayse.demir@example.com"},
    )

    assert response.status_code == 200, response.text
    assert response.json()["name"] == "Ayse Demir"
    assert response.json()["email"] == "ayse.demir@example.com"


async def test_update_rejects_taken_email(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
    customer_token: str,
) -> None:
    response = await async_client.put(
        "/api/profile",
        headers=bearer(customer_token),
        json={"email": seeded_identity.other_customer.email.upper()},
    )

    assert response.status_code == 422
    assert response.json()["errors"][0]["code"] == "email_taken"


async def test_password_change_requires_old_password(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
    customer_token: str,
) -> None:
    headers = bearer(customer_token)

    missing_old = await async_client.put(
        "/api/profile",
        headers=headers,
        json={"new_password": "brand-new-secret", "new_password_confirmation": "brand-new-secret"},
    )
    assert missing_old.status_code == 422

    wrong_old = await async_client.put(
        "/api/profile",
        headers=headers,
        json={
            "old_password": "not-my-password",
            "new_password": "brand-new-secret",
            "new_password_confirmation": "brand-new-secret",
        },
    )
    assert wrong_old.status_code == 422
    assert wrong_old.json()["errors"][0] == {
        "path": "old_password",
        "message": "The old password is incorrect.",
        "code": "invalid_password",
    }

    changed = await async_client.put(
        "/api/profile",
        headers=headers,
        json={
            "old_password": seeded_identity.customer.password,
            "new_password": "brand-new-secret",
            "new_password_confirmation": "brand-new-secret",
        },
    )
    assert changed.status_code == 200

    relogin = await async_client.post(
        "/api/auth/login",
        json={"email": seeded_identity.customer.email, "password": "brand-new-secret"},
    )
    assert relogin.status_code == 200


async def test_empty_update_is_rejected(
    async_client: AsyncClient,
    customer_token: str,
) -> None:
    response = await async_client.put("/api/profile", headers=bearer(customer_token), json={})

    assert response.status_code == 422


async def test_update_rejects_name_too_short_after_stripping(
    async_client: AsyncClient,
    customer_token: str,
) -> None:
    response = await async_client.put(
        "/api/profile",
        headers=bearer(customer_token),
        json={"name": "  a "},
    )

    assert response.status_code == 422


async def test_old_password_without_new_password_is_rejected(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
    customer_token: str,
) -> None:
    response = await async_client.put(
        "/api/profile",
        headers=bearer(customer_token),
        json={"old_password": seeded_identity.customer.password},
    )

    assert response.status_code == 422


async def test_stats_summarise_orders(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
) -> None:
    headers = bearer(customer_token)

    empty = await async_client.get("/api/profile/stats", headers=headers)
    assert empty.json()["total_orders"] == 0
    assert empty.json()["last_order"] is None

    for product_id, quantity in ((seeded_catalog.phone_id, 1), (seeded_catalog.cable_id, 3)):
        await async_client.post(
            "/api/cart/add",
            headers=headers,
            json={"product_id": str(product_id), "quantity": quantity},
        )
        placed = await async_client.post(
            "/api/orders",
            headers=headers,
            json={"shipping_address": "Cumhuriyet Meydani 3, Izmir"},
        )
        assert placed.status_code == 201, placed.text

    stats = (await async_client.get("/api/profile/stats", headers=headers)).json()
    assert stats["total_orders"] == 2
    assert stats["total_spent"] == 1515.0
    assert stats["average_order_value"] == 757.5
    assert stats["last_order"]["total"] == 15.0
    assert stats["last_order"]["status"] == "pending"
