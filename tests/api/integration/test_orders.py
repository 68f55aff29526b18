from __future__ import annotations

import re
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from shop_db.models import MailJob, Product, UserSettings
from tests.api.integration.conftest import SeededCatalog, SeededIdentity
from tests.utils import bearer, login

pytestmark = pytest.mark.asyncio

ADDRESS = "Bagdat Caddesi 42, Kadikoy, Istanbul"


async def _fill_cart(client: AsyncClient, token: str, *lines: tuple[object, int]) -> None:
    for product_id, quantity in lines:
        response = await client.post(
            "/api/cart/add",
            headers=bearer(token),
            json={"product_id": str(product_id), "quantity": quantity},
        )
        assert response.status_code == 200, response.text


async def _place_order(client: AsyncClient, token: str) -> dict[str, object]:
    response = await client.post(
        "/api/orders",
        headers=bearer(token),
        json={"shipping_address": ADDRESS, "notes": "Leave at the door"},
    )
    assert response.status_code == 201, response.text
    return response.json()


def _stock(session_factory: sessionmaker[Session], product_id: object) -> int:
    with session_factory() as session:
        product = session.get(Product, product_id)
        assert product is not None
        return product.stock_quantity


def _templates(session_factory: sessionmaker[Session]) -> list[str]:
    with session_factory() as session:
        stmt = select(MailJob.template).order_by(MailJob.created_at)
        return list(session.execute(stmt).scalars())


async def test_checkout_snapshots_cart_and_decrements_stock(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
    session_factory: sessionmaker[Session],
) -> None:
    await _fill_cart(
        async_client,
        customer_token,
        (seeded_catalog.phone_id, 2),
        (seeded_catalog.cable_id, 3),
    )

    order = await _place_order(async_client, customer_token)

    assert order["status"] == "pending"
    assert order["status_label"] == "Pending"
    assert re.fullmatch(r"ORD-\d{8}-[0-9A-F]{8}", order["order_number"])
    assert order["total_amount"] == 2 * 150000 + 3 * 500
    assert {item["product_sku"]: item["quantity"] for item in order["items"]} == {
        "PHN-001": 2,
        "CBL-001": 3,
    }
    assert _stock(session_factory, seeded_catalog.phone_id) == 3
    assert _stock(session_factory, seeded_catalog.cable_id) == 47
    assert _templates(session_factory) == ["order_confirmation"]

    cart = await async_client.get("/api/cart", headers=bearer(customer_token))
    assert cart.json()["is_empty"] is True


async def test_checkout_rejects_empty_cart_and_small_totals(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
) -> None:
    headers = bearer(customer_token)
    payload = {"shipping_address": ADDRESS}

    empty = await async_client.post("/api/orders", headers=headers, json=payload)
    assert empty.status_code == 422
    assert empty.json()["type"] == "cart_empty"

    await _fill_cart(async_client, customer_token, (seeded_catalog.cable_id, 1))
    small = await async_client.post("/api/orders", headers=headers, json=payload)
    assert small.status_code == 422
    assert small.json()["type"] == "minimum_order_amount"

    short_address = await async_client.post(
        "/api/orders",
        headers=headers,
        json={"shipping_address": "  short   "},
    )
    assert short_address.status_code == 422
    assert short_address.json()["errors"][0]["path"] == "shipping_address"


async def test_checkout_rechecks_stock_at_order_time(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
    session_factory: sessionmaker[Session],
) -> None:
    await _fill_cart(async_client, customer_token, (seeded_catalog.phone_id, 4))
    with session_factory() as session, session.begin():
        phone = session.get(Product, seeded_catalog.phone_id)
        assert phone is not None
        phone.stock_quantity = 1

    response = await async_client.post(
        "/api/orders",
        headers=bearer(customer_token),
        json={"shipping_address": ADDRESS},
    )

    assert response.status_code == 422
    assert response.json()["type"] == "insufficient_stock"
    assert _stock(session_factory, seeded_catalog.phone_id) == 1


async def test_orders_are_scoped_to_their_owner(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    seeded_identity: SeededIdentity,
    customer_token: str,
) -> None:
    await _fill_cart(async_client, customer_token, (seeded_catalog.phone_id, 1))
    order = await _place_order(async_client, customer_token)

    mine = await async_client.get("/api/orders", headers=bearer(customer_token))
    assert [item["id"] for item in mine.json()["items"]] == [order["id"]]

    other_token, _ = await login(
        async_client,
        email=seeded_identity.other_customer.email,
        password=seeded_identity.other_customer.password,
    )
    theirs = await async_client.get("/api/orders", headers=bearer(other_token))
    assert theirs.json()["items"] == []

    forbidden = await async_client.get(f"/api/orders/{order['id']}", headers=bearer(other_token))
    assert forbidden.status_code == 403

    missing = await async_client.get(f"/api/orders/{uuid4()}", headers=bearer(customer_token))
    assert missing.status_code == 404


async def test_cancel_restores_stock_and_queues_status_mail(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
    session_factory: sessionmaker[Session],
) -> None:
    await _fill_cart(async_client, customer_token, (seeded_catalog.phone_id, 2))
    order = await _place_order(async_client, customer_token)
    assert _stock(session_factory, seeded_catalog.phone_id) == 3

    cancelled = await async_client.post(
        f"/api/orders/{order['id']}/cancel",
        headers=bearer(customer_token),
    )
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"
    assert cancelled.json()["cancelled_at"]
    assert _stock(session_factory, seeded_catalog.phone_id) == 5
    assert _templates(session_factory) == ["order_confirmation", "order_status_update"]

    again = await async_client.post(
        f"/api/orders/{order['id']}/cancel",
        headers=bearer(customer_token),
    )
    assert again.status_code == 422
    assert again.json()["type"] == "invalid_status_transition"
    assert again.json()["errors"][0]["path"] == "status"


async def test_status_mail_respects_user_opt_out(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    seeded_identity: SeededIdentity,
    customer_token: str,
    session_factory: sessionmaker[Session],
) -> None:
    with session_factory() as session, session.begin():
        session.add(
            UserSettings(
                user_id=seeded_identity.customer.id,
                order_update_notifications=False,
            )
        )

    await _fill_cart(async_client, customer_token, (seeded_catalog.phone_id, 1))
    order = await _place_order(async_client, customer_token)
    response = await async_client.post(
        f"/api/orders/{order['id']}/cancel",
        headers=bearer(customer_token),
    )

    assert response.status_code == 200
    assert _templates(session_factory) == ["order_confirmation"]
