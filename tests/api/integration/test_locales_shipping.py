from __future__ import annotations

from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.api.integration.conftest import SeededIdentity
from tests.utils import bearer

pytestmark = pytest.mark.asyncio


async def test_reference_lists_are_public(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
) -> None:
    currencies = await async_client.get("/api/currencies")
    assert [item["code"] for item in currencies.json()["items"]] == ["TRY", "USD"]

    languages = await async_client.get("/api/languages")
    assert [item["code"] for item in languages.json()["items"]] == ["en", "tr"]
    assert languages.json()["items"][0]["direction"] == "ltr"

    countries = await async_client.get("/api/countries")
    codes = [item["code"] for item in countries.json()["items"]]
    assert codes == ["TR", "US"]
    assert "currency" not in countries.json()["items"][0]


async def test_countries_can_embed_currency(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
) -> None:
    response = await async_client.get("/api/countries", params={"include": "currency"})

    embedded = {item["code"]: item["currency"]["code"] for item in response.json()["items"]}
    assert embedded == {"TR": "TRY", "US": "USD"}


async def test_admin_manages_currencies(
    async_client: AsyncClient,
    admin_token: str,
) -> None:
    headers = bearer(admin_token)

    created = await async_client.post(
        "/api/currencies",
        headers=headers,
        json={"code": "eur", "name": "Euro", "symbol": "€"},
    )
    assert created.status_code == 201, created.text
    currency = created.json()
    assert currency["code"] == "EUR"
    assert currency["decimals"] == 2

    renamed = await async_client.put(
        f"/api/currencies/{currency['id']}",
        headers=headers,
        json={"name": "Euro (EU)"},
    )
    assert renamed.json()["name"] == "Euro (EU)"

    removed = await async_client.delete(f"/api/currencies/{currency['id']}", headers=headers)
    assert removed.status_code == 204
    missing = await async_client.get(f"/api/currencies/{currency['id']}")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Currency not found."


async def test_country_requires_existing_currency(
    async_client: AsyncClient,
    admin_token: str,
) -> None:
    response = await async_client.post(
        "/api/countries",
        headers=bearer(admin_token),
        json={"code": "de", "name": "Germany", "locale": "de_DE", "currency_id": str(uuid4())},
    )

    assert response.status_code == 422
    assert response.json()["errors"][0]["path"] == "currency_id"


async def test_customers_cannot_manage_locales(
    async_client: AsyncClient,
    customer_token: str,
) -> None:
    response = await async_client.post(
        "/api/languages",
        headers=bearer(customer_token),
        json={"code": "de", "name": "German", "native_name": "Deutsch", "locale": "de_DE"},
    )

    assert response.status_code == 403


async def test_shipping_methods_are_listed_in_sort_order(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
) -> None:
    response = await async_client.get("/api/shipping/methods")

    assert response.status_code == 200
    methods = response.json()["items"]
    assert [method["name"] for method in methods] == [
        "Standard Shipping",
        "Express Shipping",
        "Free Shipping",
    ]
    assert methods[0]["price"] == 2999
    assert methods[0]["delivery_time"] == "3-5 business days"


async def test_inactive_shipping_methods_are_admin_only(
    async_client: AsyncClient,
    admin_token: str,
) -> None:
    headers = bearer(admin_token)
    created = await async_client.post(
        "/api/shipping/methods",
        headers=headers,
        json={
            "name": "Same Day",
            "price": 9999,
            "min_delivery_days": 1,
            "max_delivery_days": 1,
            "is_active": False,
            "sort_order": 4,
        },
    )
    assert created.status_code == 201, created.text
    assert created.json()["delivery_time"] == "1 business day"

    public = await async_client.get(
        "/api/shipping/methods",
        params={"include_inactive": "true"},
    )
    assert "Same Day" not in [method["name"] for method in public.json()["items"]]

    admin_view = await async_client.get(
        "/api/shipping/methods",
        params={"include_inactive": "true"},
        headers=headers,
    )
    assert admin_view.json()["items"][-1]["name"] == "Same Day"


async def test_shipping_method_window_is_validated(
    async_client: AsyncClient,
    admin_token: str,
) -> None:
    response = await async_client.post(
        "/api/shipping/methods",
        headers=bearer(admin_token),
        json={"name": "Backwards", "min_delivery_days": 5, "max_delivery_days": 2},
    )

    assert response.status_code == 422
