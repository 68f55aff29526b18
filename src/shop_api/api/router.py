"""Compose every feature router under the API prefix."""

from __future__ import annotations

from fastapi import APIRouter

from shop_api.features.addresses.router import router as addresses_router
from shop_api.features.admin_orders.router import router as admin_orders_router
from shop_api.features.app_settings.router import router as app_settings_router
from shop_api.features.audit.router import router as audit_router
from shop_api.features.auth.router import router as auth_router
from shop_api.features.cart.router import router as cart_router
from shop_api.features.categories.router import router as categories_router
from shop_api.features.dashboard.router import router as dashboard_router
from shop_api.features.health.router import router as health_router
from shop_api.features.locales.router import router as locales_router
from shop_api.features.orders.router import router as orders_router
from shop_api.features.products.router import router as products_router
from shop_api.features.profile.router import router as profile_router
from shop_api.features.shipping.router import router as shipping_router
from shop_api.features.user_settings.router import router as user_settings_router


def create_api_router() -> APIRouter:
    """Return the API router with all feature routes included."""

    api_router = APIRouter()
    api_router.include_router(health_router)
    api_router.include_router(auth_router)
    api_router.include_router(profile_router)
    api_router.include_router(user_settings_router)
    api_router.include_router(addresses_router)
    api_router.include_router(locales_router)
    api_router.include_router(categories_router)
    api_router.include_router(products_router)
    api_router.include_router(shipping_router)
    api_router.include_router(cart_router)
    api_router.include_router(orders_router)
    api_router.include_router(admin_orders_router)
    api_router.include_router(dashboard_router)
    api_router.include_router(app_settings_router)
    api_router.include_router(audit_router)
    return api_router


__all__ = ["create_api_router"]
