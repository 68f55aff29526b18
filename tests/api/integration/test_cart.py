from __future__ import annotations

from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.orm import Session, sessionmaker

from shop_db.models import Product
from tests.api.integration.conftest import SeededCatalog
from tests.utils import bearer

pytestmark = pytest.mark.asyncio


async def _add(
    client: AsyncClient,
    token: str,
    product_id: object,
    quantity: int,
) -> dict[str, object]:
    response = await client.post(
        "/api/cart/add",
        headers=bearer(token),
        json={"product_id": str(product_id), "quantity": quantity},
    )
    assert response.status_code == 200, response.text
    return response.json()


async def test_new_cart_is_empty(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
) -> None:
    response = await async_client.get("/api/cart", headers=bearer(customer_token))

    assert response.status_code == 200
    body = response.json()
    assert body["items"] == []
    assert body["is_empty"] is True
    assert body["total_amount"] == 0


async def test_adding_same_product_merges_quantities(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
) -> None:
    await _add(async_client, customer_token, seeded_catalog.cable_id, 2)
    cart = await _add(async_client, customer_token, seeded_catalog.cable_id, 3)
    cart = await _add(async_client, customer_token, seeded_catalog.phone_id, 1)

    lines = {line["product"]["sku"]: line for line in cart["items"]}
    assert lines["CBL-001"]["quantity"] == 5
    assert lines["CBL-001"]["unit_price"] == 500
    assert lines["CBL-001"]["total_price"] == 2500
    assert cart["total_items"] == 6
    assert cart["total_amount"] == 2500 + 150000
    assert cart["is_empty"] is False


async def test_add_rejects_unknown_inactive_and_unavailable_stock(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
) -> None:
    headers = bearer(customer_token)

    unknown = await async_client.post(
        "/api/cart/add",
        headers=headers,
        json={"product_id": str(uuid4()), "quantity": 1},
    )
    assert unknown.status_code == 404

    inactive = await async_client.post(
        "/api/cart/add",
        headers=headers,
        json={"product_id": str(seeded_catalog.inactive_product_id), "quantity": 1},
    )
    assert inactive.status_code == 422
    assert inactive.json()["errors"][0]["code"] == "product_unavailable"

    sold_out = await async_client.post(
        "/api/cart/add",
        headers=headers,
        json={"product_id": str(seeded_catalog.sold_out_id), "quantity": 1},
    )
    assert sold_out.status_code == 422
    assert sold_out.json()["type"] == "out_of_stock"

    too_many = await async_client.post(
        "/api/cart/add",
        headers=headers,
        json={"product_id": str(seeded_catalog.phone_id), "quantity": 6},
    )
    assert too_many.status_code == 422
    assert too_many.json()["type"] == "insufficient_stock"

    zero = await async_client.post(
        "/api/cart/add",
        headers=headers,
        json={"product_id": str(seeded_catalog.phone_id), "quantity": 0},
    )
    assert zero.status_code == 422
    assert zero.json()["errors"][0]["path"] == "quantity"


async def test_update_and_remove_cart_lines(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
) -> None:
    headers = bearer(customer_token)
    await _add(async_client, customer_token, seeded_catalog.cable_id, 1)

    updated = await async_client.put(
        "/api/cart/update",
        headers=headers,
        json={"product_id": str(seeded_catalog.cable_id), "quantity": 4},
    )
    assert updated.status_code == 200
    assert updated.json()["items"][0]["quantity"] == 4

    missing = await async_client.put(
        "/api/cart/update",
        headers=headers,
        json={"product_id": str(seeded_catalog.phone_id), "quantity": 1},
    )
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Product is not in the cart."

    removed = await async_client.delete(
        f"/api/cart/items/{seeded_catalog.cable_id}",
        headers=headers,
    )
    assert removed.status_code == 200
    assert removed.json()["is_empty"] is True

    again = await async_client.delete(
        f"/api/cart/items/{seeded_catalog.cable_id}",
        headers=headers,
    )
    assert again.status_code == 404


async def test_clear_cart(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
) -> None:
    headers = bearer(customer_token)
    await _add(async_client, customer_token, seeded_catalog.cable_id, 1)
    await _add(async_client, customer_token, seeded_catalog.phone_id, 1)

    cleared = await async_client.delete("/api/cart", headers=headers)
    assert cleared.status_code == 204

    cart = await async_client.get("/api/cart", headers=headers)
    assert cart.json()["items"] == []


async def test_validate_reports_stock_drift(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
    session_factory: sessionmaker[Session],
) -> None:
    headers = bearer(customer_token)

    empty = (await async_client.get("/api/cart/validate", headers=headers)).json()
    assert empty["valid"] is False
    assert [issue["code"] for issue in empty["issues"]] == ["cart_empty"]

    await _add(async_client, customer_token, seeded_catalog.phone_id, 4)
    await _add(async_client, customer_token, seeded_catalog.cable_id, 1)
    assert (await async_client.get("/api/cart/validate", headers=headers)).json()["valid"]

    with session_factory() as session, session.begin():
        phone = session.get(Product, seeded_catalog.phone_id)
        cable = session.get(Product, seeded_catalog.cable_id)
        assert phone is not None and cable is not None
        phone.stock_quantity = 2
        cable.is_active = False

    report = (await async_client.get("/api/cart/validate", headers=headers)).json()
    assert report["valid"] is False
    issues = {issue["code"]: issue for issue in report["issues"]}
    assert issues["insufficient_stock"]["requested"] == 4
    assert issues["insufficient_stock"]["available"] == 2
    assert issues["product_unavailable"]["product_id"] == str(seeded_catalog.cable_id)


async def test_carts_are_private_to_each_user(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
    admin_token: str,
) -> None:
    await _add(async_client, customer_token, seeded_catalog.cable_id, 2)

    other = await async_client.get("/api/cart", headers=bearer(admin_token))
    assert other.json()["items"] == []
