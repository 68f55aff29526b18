from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from uuid import UUID

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from shop_api.app.bootstrap import seed_reference_data
from shop_api.core.security.hashing import hash_password
from shop_api.main import create_app
from shop_api.settings import Settings, get_settings
from shop_db.engine import session_scope
from shop_db.models import Category, Country, Product, User, UserType
from tests.utils import login


@dataclass(frozen=True, slots=True)
class SeededUser:
    id: UUID
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class SeededIdentity:
    admin: SeededUser
    customer: SeededUser
    other_customer: SeededUser


@dataclass(frozen=True, slots=True)
class SeededCatalog:
    category_id: UUID
    inactive_category_id: UUID
    phone_id: UUID
    cable_id: UUID
    inactive_product_id: UUID
    sold_out_id: UUID


def _create_user(
    session: Session,
    *,
    email: str,
    name: str,
    password: str,
    user_type: UserType,
) -> SeededUser:
    country = session.execute(select(Country).where(Country.code == "TR")).scalar_one()
    user = User(
        name=name,
        email=email,
        hashed_password=hash_password(password),
        user_type=user_type,
        is_active=True,
        country_id=country.id,
        failed_login_count=0,
    )
    session.add(user)
    session.flush()
    return SeededUser(id=user.id, email=email, password=password)


@pytest.fixture()
def seeded_identity(session_factory: sessionmaker[Session]) -> SeededIdentity:
    with session_scope(session_factory) as session:
        seed_reference_data(session)
        admin = _create_user(
            session,
            email="admin@example.com",
            name="Store Admin",
            password="admin-password-1",
            user_type=UserType.ADMIN,
        )
        customer = _create_user(
            session,
            email="ayse@example.com",
            name="Ayse Customer",
            password="customer-password-1",
            user_type=UserType.USER,
        )
        other = _create_user(
            session,
            email="mehmet@example.com",
            name="Mehmet Customer",
            password="customer-password-2",
            user_type=UserType.USER,
        )
    return SeededIdentity(admin=admin, customer=customer, other_customer=other)


@pytest.fixture()
def seeded_catalog(
    session_factory: sessionmaker[Session],
    seeded_identity: SeededIdentity,
) -> SeededCatalog:
    with session_scope(session_factory) as session:
        category = Category(name="Electronics", description="Phones and accessories")
        hidden = Category(name="Archived Goods", is_active=False)
        session.add_all([category, hidden])
        session.flush()

        def product(name: str, sku: str, price: int, stock: int, **extra: object) -> Product:
            row = Product(
                name=name,
                sku=sku,
                price=price,
                stock_quantity=stock,
                category_id=category.id,
                **extra,
            )
            session.add(row)
            return row

        phone = product("Smart Phone", "PHN-001", 150000, 5, is_featured=True)
        cable = product("USB Cable", "CBL-001", 500, 50)
        inactive = product("Old Phone", "PHN-000", 90000, 3, is_active=False)
        sold_out = product("Tablet", "TAB-001", 250000, 0)
        session.flush()
        return SeededCatalog(
            category_id=category.id,
            inactive_category_id=hidden.id,
            phone_id=phone.id,
            cable_id=cable.id,
            inactive_product_id=inactive.id,
            sold_out_id=sold_out.id,
        )


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    app = create_app(settings=settings)
    app.dependency_overrides[get_settings] = lambda: settings
    return app


@pytest_asyncio.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client


@pytest_asyncio.fixture()
async def admin_token(async_client: AsyncClient, seeded_identity: SeededIdentity) -> str:
    token, _ = await login(
        async_client,
        email=seeded_identity.admin.email,
        password=seeded_identity.admin.password,
    )
    return token


@pytest_asyncio.fixture()
async def customer_token(async_client: AsyncClient, seeded_identity: SeededIdentity) -> str:
    token, _ = await login(
        async_client,
        email=seeded_identity.customer.email,
        password=seeded_identity.customer.password,
    )
    return token
