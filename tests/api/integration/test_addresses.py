from __future__ import annotations

from uuid import UUID, uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from shop_db.models import Country
from tests.api.integration.conftest import SeededIdentity
from tests.utils import bearer, login

pytestmark = pytest.mark.asyncio


@pytest.fixture()
def turkey_id(session_factory: sessionmaker[Session], seeded_identity: SeededIdentity) -> UUID:
    with session_factory() as session:
        return session.execute(select(Country.id).where(Country.code == "TR")).scalar_one()


def _address(country_id: UUID, **overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "first_name": "Ayse",
        "last_name": "Yilmaz",
        "address_line_1": "Moda Caddesi 5",
        "city": "Istanbul",
        "state": "Kadikoy",
        "postal_code": "34710",
        "country_id": str(country_id),
    }
    payload.update(overrides)
    return payload


async def test_create_and_list_addresses(
    async_client: AsyncClient,
    customer_token: str,
    turkey_id: UUID,
) -> None:
    headers = bearer(customer_token)

    created = await async_client.post("/api/addresses", headers=headers, json=_address(turkey_id))
    assert created.status_code == 201, created.text
    body = created.json()
    assert body["type"] == "shipping"
    assert body["full_name"] == "Ayse Yilmaz"

    await async_client.post(
        "/api/addresses",
        headers=headers,
        json=_address(turkey_id, type="billing", city="Ankara"),
    )

    listed = await async_client.get("/api/addresses", headers=headers)
    assert listed.json()["total"] == 2

    billing = await async_client.get("/api/addresses", params={"type": "billing"}, headers=headers)
    assert [item["city"] for item in billing.json()["items"]] == ["Ankara"]


async def test_only_one_default_address_per_type(
    async_client: AsyncClient,
    customer_token: str,
    turkey_id: UUID,
) -> None:
    headers = bearer(customer_token)
    first = await async_client.post(
        "/api/addresses",
        headers=headers,
        json=_address(turkey_id, is_default=True),
    )
    second = await async_client.post(
        "/api/addresses",
        headers=headers,
        json=_address(turkey_id, is_default=True, city="Izmir"),
    )
    assert second.json()["is_default"] is True

    reloaded = await async_client.get(f"/api/addresses/{first.json()['id']}", headers=headers)
    assert reloaded.json()["is_default"] is False


async def test_create_address_validation(
    async_client: AsyncClient,
    customer_token: str,
    turkey_id: UUID,
) -> None:
    headers = bearer(customer_token)

    missing = await async_client.post(
        "/api/addresses",
        headers=headers,
        json={"first_name": "Ayse", "country_id": str(turkey_id)},
    )
    assert missing.status_code == 422
    paths = {item["path"] for item in missing.json()["errors"]}
    assert {"last_name", "address_line_1", "city", "state", "postal_code"} <= paths

    unknown_country = await async_client.post(
        "/api/addresses",
        headers=headers,
        json=_address(uuid4()),
    )
    assert unknown_country.status_code == 422
    assert unknown_country.json()["errors"][0]["code"] == "country_not_found"


async def test_update_and_delete_address(
    async_client: AsyncClient,
    customer_token: str,
    turkey_id: UUID,
) -> None:
    headers = bearer(customer_token)
    created = await async_client.post("/api/addresses", headers=headers, json=_address(turkey_id))
    url = f"/api/addresses/{created.json()['id']}"

    updated = await async_client.put(url, headers=headers, json={"city": "Bursa"})
    assert updated.status_code == 200
    assert updated.json()["city"] == "Bursa"

    deleted = await async_client.delete(url, headers=headers)
    assert deleted.status_code == 204

    missing = await async_client.get(url, headers=headers)
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Address not found."


async def test_addresses_are_private(
    async_client: AsyncClient,
    seeded_identity: SeededIdentity,
    customer_token: str,
    turkey_id: UUID,
) -> None:
    created = await async_client.post(
        "/api/addresses",
        headers=bearer(customer_token),
        json=_address(turkey_id),
    )
    other_token, _ = await login(
        async_client,
        email=seeded_identity.other_customer.email,
        password=seeded_identity.other_customer.password,
    )

    response = await async_client.get(
        f"/api/addresses/{created.json()['id']}",
        headers=bearer(other_token),
    )

    assert response.status_code == 404
