"""Service factories used by API routers.

Routers import per-request service constructors from here so every feature
builds its service the same way from the request-scoped session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from shop_api.db import get_db_read, get_db_write
from shop_api.settings import Settings, get_settings

if TYPE_CHECKING:
    from shop_api.features.addresses.service import AddressesService
    from shop_api.features.admin_orders.service import AdminOrdersService
    from shop_api.features.app_settings.service import ApplicationSettingsService
    from shop_api.features.audit.service import AuditService
    from shop_api.features.auth.service import AuthService
    from shop_api.features.cart.service import CartService
    from shop_api.features.categories.service import CategoriesService
    from shop_api.features.dashboard.service import DashboardService
    from shop_api.features.health.service import HealthService
    from shop_api.features.locales.service import LocalesService
    from shop_api.features.orders.service import OrdersService
    from shop_api.features.products.service import ProductsService
    from shop_api.features.profile.service import ProfileService
    from shop_api.features.shipping.service import ShippingService
    from shop_api.features.user_settings.service import UserSettingsService

WriteSessionDep = Annotated[Session, Depends(get_db_write)]
ReadSessionDep = Annotated[Session, Depends(get_db_read)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_auth_service(session: WriteSessionDep, settings: SettingsDep) -> AuthService:
    from shop_api.features.auth.service import AuthService

    return AuthService(session=session, settings=settings)


def get_profile_service(session: WriteSessionDep, settings: SettingsDep) -> ProfileService:
    from shop_api.features.profile.service import ProfileService

    return ProfileService(session=session, settings=settings)


def get_profile_service_read(session: ReadSessionDep, settings: SettingsDep) -> ProfileService:
    from shop_api.features.profile.service import ProfileService

    return ProfileService(session=session, settings=settings)


def get_user_settings_service(
    session: WriteSessionDep, settings: SettingsDep
) -> UserSettingsService:
    from shop_api.features.user_settings.service import UserSettingsService

    return UserSettingsService(session=session, settings=settings)


def get_addresses_service(session: WriteSessionDep, settings: SettingsDep) -> AddressesService:
    from shop_api.features.addresses.service import AddressesService

    return AddressesService(session=session, settings=settings)


def get_addresses_service_read(
    session: ReadSessionDep, settings: SettingsDep
) -> AddressesService:
    from shop_api.features.addresses.service import AddressesService

    return AddressesService(session=session, settings=settings)


def get_categories_service(session: WriteSessionDep, settings: SettingsDep) -> CategoriesService:
    from shop_api.features.categories.service import CategoriesService

    return CategoriesService(session=session, settings=settings)


def get_categories_service_read(
    session: ReadSessionDep, settings: SettingsDep
) -> CategoriesService:
    from shop_api.features.categories.service import CategoriesService

    return CategoriesService(session=session, settings=settings)


def get_products_service(session: WriteSessionDep, settings: SettingsDep) -> ProductsService:
    from shop_api.features.products.service import ProductsService

    return ProductsService(session=session, settings=settings)


def get_products_service_read(session: ReadSessionDep, settings: SettingsDep) -> ProductsService:
    from shop_api.features.products.service import ProductsService

    return ProductsService(session=session, settings=settings)


def get_locales_service(session: WriteSessionDep, settings: SettingsDep) -> LocalesService:
    from shop_api.features.locales.service import LocalesService

    return LocalesService(session=session, settings=settings)


def get_locales_service_read(session: ReadSessionDep, settings: SettingsDep) -> LocalesService:
    from shop_api.features.locales.service import LocalesService

    return LocalesService(session=session, settings=settings)


def get_shipping_service(session: WriteSessionDep, settings: SettingsDep) -> ShippingService:
    from shop_api.features.shipping.service import ShippingService

    return ShippingService(session=session, settings=settings)


def get_shipping_service_read(session: ReadSessionDep, settings: SettingsDep) -> ShippingService:
    from shop_api.features.shipping.service import ShippingService

    return ShippingService(session=session, settings=settings)


def get_cart_service(session: WriteSessionDep, settings: SettingsDep) -> CartService:
    from shop_api.features.cart.service import CartService

    return CartService(session=session, settings=settings)


def get_orders_service(session: WriteSessionDep, settings: SettingsDep) -> OrdersService:
    from shop_api.features.orders.service import OrdersService

    return OrdersService(session=session, settings=settings)


def get_orders_service_read(session: ReadSessionDep, settings: SettingsDep) -> OrdersService:
    from shop_api.features.orders.service import OrdersService

    return OrdersService(session=session, settings=settings)


def get_admin_orders_service(
    session: WriteSessionDep, settings: SettingsDep
) -> AdminOrdersService:
    from shop_api.features.admin_orders.service import AdminOrdersService

    return AdminOrdersService(session=session, settings=settings)


def get_admin_orders_service_read(
    session: ReadSessionDep, settings: SettingsDep
) -> AdminOrdersService:
    from shop_api.features.admin_orders.service import AdminOrdersService

    return AdminOrdersService(session=session, settings=settings)


def get_dashboard_service(session: ReadSessionDep, settings: SettingsDep) -> DashboardService:
    from shop_api.features.dashboard.service import DashboardService

    return DashboardService(session=session, settings=settings)


def get_app_settings_service(
    session: WriteSessionDep, settings: SettingsDep
) -> ApplicationSettingsService:
    from shop_api.features.app_settings.service import ApplicationSettingsService

    return ApplicationSettingsService(session=session, settings=settings)


def get_app_settings_service_read(
    session: ReadSessionDep, settings: SettingsDep
) -> ApplicationSettingsService:
    from shop_api.features.app_settings.service import ApplicationSettingsService

    return ApplicationSettingsService(session=session, settings=settings)


def get_audit_service(session: ReadSessionDep) -> AuditService:
    from shop_api.features.audit.service import AuditService

    return AuditService(session=session)


def get_health_service(session: ReadSessionDep, settings: SettingsDep) -> HealthService:
    from shop_api.features.health.service import HealthService

    return HealthService(session=session, settings=settings)


__all__ = [
    "ReadSessionDep",
    "SettingsDep",
    "WriteSessionDep",
    "get_addresses_service",
    "get_addresses_service_read",
    "get_admin_orders_service",
    "get_admin_orders_service_read",
    "get_app_settings_service",
    "get_app_settings_service_read",
    "get_audit_service",
    "get_auth_service",
    "get_cart_service",
    "get_categories_service",
    "get_categories_service_read",
    "get_dashboard_service",
    "get_health_service",
    "get_locales_service",
    "get_locales_service_read",
    "get_orders_service",
    "get_orders_service_read",
    "get_products_service",
    "get_products_service_read",
    "get_profile_service",
    "get_profile_service_read",
    "get_shipping_service",
    "get_shipping_service_read",
    "get_user_settings_service",
]
