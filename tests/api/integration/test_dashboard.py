from __future__ import annotations

import pytest
from httpx import AsyncClient

from tests.api.integration.conftest import SeededCatalog
from tests.utils import bearer

pytestmark = pytest.mark.asyncio


async def test_stats_cards(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    admin_token: str,
) -> None:
    response = await async_client.get("/api/admin/dashboard/stats", headers=bearer(admin_token))

    assert response.status_code == 200
    cards = {card["title"]: card for card in response.json()["cards"]}
    assert set(cards) == {"Total Users", "Orders", "Products", "Revenue"}
    assert cards["Total Users"]["value"] == 3
    assert cards["Total Users"]["change"] == "+100%"
    assert cards["Products"]["value"] == 4
    assert cards["Orders"]["value"] == 0
    assert cards["Orders"]["change"] == "0%"
    assert cards["Revenue"]["value"] == 0


async def test_activity_feed_includes_new_orders(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
    admin_token: str,
) -> None:
    await async_client.post(
        "/api/cart/add",
        headers=bearer(customer_token),
        json={"product_id": str(seeded_catalog.phone_id), "quantity": 1},
    )
    placed = await async_client.post(
        "/api/orders",
        headers=bearer(customer_token),
        json={"shipping_address": "Istiklal Caddesi 10, Istanbul"},
    )
    order_number = placed.json()["order_number"]

    response = await async_client.get(
        "/api/admin/dashboard/activity",
        headers=bearer(admin_token),
    )

    assert response.status_code == 200
    items = response.json()["items"]
    assert len(items) <= 10
    messages = [item["message"] for item in items if item["type"] == "order"]
    assert f"Ayse Customer placed a new order #{order_number}" in messages
    assert any(item["type"] == "user" for item in items)


async def test_system_status_components(
    async_client: AsyncClient,
    admin_token: str,
) -> None:
    response = await async_client.get(
        "/api/admin/dashboard/system-status",
        headers=bearer(admin_token),
    )

    assert response.status_code == 200
    body = response.json()
    states = {component["id"]: component["status"] for component in body["components"]}
    assert states["server"] == "online"
    assert states["database"] == "online"
    assert states["storage"] in {"online", "warning", "offline"}
    assert body["checked_at"]


async def test_dashboard_is_admin_only(
    async_client: AsyncClient,
    customer_token: str,
) -> None:
    response = await async_client.get(
        "/api/admin/dashboard/stats",
        headers=bearer(customer_token),
    )

    assert response.status_code == 403
