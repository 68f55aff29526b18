from __future__ import annotations

from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.api.integration.conftest import SeededCatalog
from tests.utils import bearer

pytestmark = pytest.mark.asyncio


async def test_public_listing_hides_inactive_products(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
) -> None:
    response = await async_client.get("/api/products", params={"sort": "price"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["total"] == 3
    assert [item["sku"] for item in payload["items"]] == ["CBL-001", "PHN-001", "TAB-001"]
    assert payload["items"][0]["category"]["name"] == "Electronics"
    assert payload["items"][2]["in_stock"] is False


async def test_admin_listing_can_filter_inactive_products(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    admin_token: str,
) -> None:
    response = await async_client.get(
        "/api/products",
        params={"is_active": "false"},
        headers=bearer(admin_token),
    )

    assert response.status_code == 200
    assert [item["sku"] for item in response.json()["items"]] == ["PHN-000"]


async def test_listing_supports_search_price_range_and_pagination(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
) -> None:
    searched = await async_client.get("/api/products", params={"search": "cable"})
    assert [item["sku"] for item in searched.json()["items"]] == ["CBL-001"]

    ranged = await async_client.get(
        "/api/products",
        params={"min_price": 1000, "max_price": 200000},
    )
    assert [item["sku"] for item in ranged.json()["items"]] == ["PHN-001"]

    paged = await async_client.get(
        "/api/products",
        params={"per_page": 2, "page": 2, "sort": "-price"},
    )
    body = paged.json()
    assert body["has_previous"] is True
    assert body["has_next"] is False
    assert [item["sku"] for item in body["items"]] == ["CBL-001"]


async def test_listing_rejects_inverted_price_range_and_unknown_sort(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
) -> None:
    inverted = await async_client.get(
        "/api/products",
        params={"min_price": 500, "max_price": 100},
    )
    assert inverted.status_code == 422
    assert inverted.json()["errors"][0]["path"] == "max_price"

    bad_sort = await async_client.get("/api/products", params={"sort": "colour"})
    assert bad_sort.status_code == 422
    assert "Unsupported sort field 'colour'" in bad_sort.json()["detail"]

    short_search = await async_client.get("/api/products", params={"search": "x"})
    assert short_search.status_code == 422


async def test_inactive_product_is_only_visible_to_admins(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    admin_token: str,
    customer_token: str,
) -> None:
    url = f"/api/products/{seeded_catalog.inactive_product_id}"

    assert (await async_client.get(url)).status_code == 404
    assert (await async_client.get(url, headers=bearer(customer_token))).status_code == 404
    admin_view = await async_client.get(url, headers=bearer(admin_token))
    assert admin_view.status_code == 200
    assert admin_view.json()["is_active"] is False


async def test_admin_creates_product_with_generated_slug(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    admin_token: str,
) -> None:
    response = await async_client.post(
        "/api/products",
        headers=bearer(admin_token),
        json={
            "name": "Smart Phone",
            "sku": "PHN-002",
            "price": 175000,
            "stock_quantity": 4,
            "category_id": str(seeded_catalog.category_id),
        },
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["slug"] == "smart-phone-2"
    assert body["in_stock"] is True
    assert body["is_featured"] is False


async def test_create_product_validation(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    admin_token: str,
) -> None:
    duplicate = await async_client.post(
        "/api/products",
        headers=bearer(admin_token),
        json={
            "name": "Another Cable",
            "sku": "CBL-001",
            "price": 700,
            "category_id": str(seeded_catalog.category_id),
        },
    )
    assert duplicate.status_code == 422
    assert duplicate.json()["errors"][0]["code"] == "sku_taken"

    missing_category = await async_client.post(
        "/api/products",
        headers=bearer(admin_token),
        json={"name": "Orphan", "sku": "ORP-001", "price": 700, "category_id": str(uuid4())},
    )
    assert missing_category.status_code == 422
    assert missing_category.json()["errors"][0]["code"] == "category_not_found"

    free = await async_client.post(
        "/api/products",
        headers=bearer(admin_token),
        json={
            "name": "Freebie",
            "sku": "FRE-001",
            "price": 0,
            "category_id": str(seeded_catalog.category_id),
        },
    )
    assert free.status_code == 422
    assert free.json()["errors"][0]["path"] == "price"


async def test_customers_cannot_manage_products(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
) -> None:
    response = await async_client.put(
        f"/api/products/{seeded_catalog.cable_id}",
        headers=bearer(customer_token),
        json={"price": 1},
    )

    assert response.status_code == 403
    assert response.json()["type"] == "forbidden"


async def test_update_delete_and_restore_product(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    admin_token: str,
) -> None:
    url = f"/api/products/{seeded_catalog.cable_id}"
    headers = bearer(admin_token)

    updated = await async_client.put(
        url,
        headers=headers,
        json={"price": 650, "name": "USB-C Cable"},
    )
    assert updated.status_code == 200
    assert updated.json()["price"] == 650
    assert updated.json()["slug"] == "usb-c-cable"

    empty = await async_client.put(url, headers=headers, json={})
    assert empty.status_code == 422

    deleted = await async_client.delete(url, headers=headers)
    assert deleted.status_code == 204
    assert (await async_client.get(url)).status_code == 404

    restored = await async_client.post(f"{url}/restore", headers=headers)
    assert restored.status_code == 200
    assert restored.json().get("deleted_at") is None
    assert (await async_client.get(url)).status_code == 200


async def test_unknown_product_returns_problem_details(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
) -> None:
    response = await async_client.get(f"/api/products/{uuid4()}")

    assert response.status_code == 404
    body = response.json()
    assert body["type"] == "not_found"
    assert body["detail"] == "Product not found."
    assert body["instance"].startswith("/api/products/")
