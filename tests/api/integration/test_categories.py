from __future__ import annotations

import pytest
from httpx import AsyncClient

from tests.api.integration.conftest import SeededCatalog
from tests.utils import bearer

pytestmark = pytest.mark.asyncio


async def test_public_listing_only_shows_active_categories(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
) -> None:
    response = await async_client.get("/api/categories")

    assert response.status_code == 200
    payload = response.json()
    assert [item["name"] for item in payload["items"]] == ["Electronics"]
    assert payload["items"][0]["slug"] == "electronics"


async def test_admin_listing_includes_inactive_categories(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    admin_token: str,
) -> None:
    response = await async_client.get("/api/categories", headers=bearer(admin_token))

    assert response.status_code == 200
    assert [item["name"] for item in response.json()["items"]] == [
        "Archived Goods",
        "Electronics",
    ]


async def test_inactive_category_is_hidden_from_customers(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
    admin_token: str,
) -> None:
    url = f"/api/categories/{seeded_catalog.inactive_category_id}"

    assert (await async_client.get(url, headers=bearer(customer_token))).status_code == 404
    assert (await async_client.get(url, headers=bearer(admin_token))).status_code == 200


async def test_admin_creates_category_and_rejects_duplicate_names(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    admin_token: str,
) -> None:
    created = await async_client.post(
        "/api/categories",
        headers=bearer(admin_token),
        json={"name": "  Home & Garden ", "description": "Outdoor living"},
    )
    assert created.status_code == 201, created.text
    assert created.json()["name"] == "Home & Garden"
    assert created.json()["slug"] == "home-garden"

    duplicate = await async_client.post(
        "/api/categories",
        headers=bearer(admin_token),
        json={"name": "Electronics"},
    )
    assert duplicate.status_code == 422
    assert duplicate.json()["errors"][0]["code"] == "name_taken"

    slug_clash = await async_client.post(
        "/api/categories",
        headers=bearer(admin_token),
        json={"name": "Gadgets", "slug": "Electronics"},
    )
    assert slug_clash.status_code == 422
    assert slug_clash.json()["errors"][0]["code"] == "slug_taken"


async def test_customer_cannot_create_category(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    customer_token: str,
) -> None:
    response = await async_client.post(
        "/api/categories",
        headers=bearer(customer_token),
        json={"name": "Sneaky"},
    )

    assert response.status_code == 403


async def test_soft_delete_and_restore_category(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    admin_token: str,
) -> None:
    url = f"/api/categories/{seeded_catalog.category_id}"
    headers = bearer(admin_token)

    assert (await async_client.delete(url, headers=headers)).status_code == 204
    assert (await async_client.get(url, headers=headers)).status_code == 404

    listed = await async_client.get(
        "/api/categories",
        params={"include_deleted": "true"},
        headers=headers,
    )
    deleted = [item for item in listed.json()["items"] if item["name"] == "Electronics"]
    assert deleted and deleted[0]["deleted_at"] is not None

    restored = await async_client.post(f"{url}/restore", headers=headers)
    assert restored.status_code == 200
    assert "deleted_at" not in restored.json()


async def test_force_delete_requires_an_empty_category(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    admin_token: str,
) -> None:
    headers = bearer(admin_token)

    blocked = await async_client.delete(
        f"/api/categories/{seeded_catalog.category_id}/force",
        headers=headers,
    )
    assert blocked.status_code == 409
    assert blocked.json()["type"] == "conflict"

    removed = await async_client.delete(
        f"/api/categories/{seeded_catalog.inactive_category_id}/force",
        headers=headers,
    )
    assert removed.status_code == 204
    missing = await async_client.get(
        f"/api/categories/{seeded_catalog.inactive_category_id}",
        headers=headers,
    )
    assert missing.status_code == 404


async def test_renaming_category_regenerates_slug(
    async_client: AsyncClient,
    seeded_catalog: SeededCatalog,
    admin_token: str,
) -> None:
    response = await async_client.put(
        f"/api/categories/{seeded_catalog.category_id}",
        headers=bearer(admin_token),
        json={"name": "Consumer Electronics"},
    )

    assert response.status_code == 200
    assert response.json()["slug"] == "consumer-electronics"
