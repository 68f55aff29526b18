"""Static permission map keyed by user type."""

from __future__ import annotations

from shop_db.models import User, UserType

USER_PERMISSIONS: frozenset[str] = frozenset(
    {
        "product.read",
        "category.read",
        "order.read",
        "order.create",
        "cart.read",
        "cart.update",
    }
)

ADMIN_PERMISSIONS: frozenset[str] = USER_PERMISSIONS | frozenset(
    {
        "user.read",
        "user.create",
        "user.update",
        "user.delete",
        "product.create",
        "product.update",
        "product.delete",
        "category.create",
        "category.update",
        "category.delete",
        "order.update",
        "order.delete",
        "order.manage",
        "settings.manage",
        "audit.read",
        "dashboard.read",
        "catalog.manage",
    }
)

PERMISSIONS_BY_USER_TYPE: dict[UserType, frozenset[str]] = {
    UserType.ADMIN: ADMIN_PERMISSIONS,
    UserType.USER: USER_PERMISSIONS,
}


def permissions_for(user: User) -> frozenset[str]:
    return PERMISSIONS_BY_USER_TYPE.get(UserType(user.user_type), frozenset())


def has_permission(user: User, permission_key: str) -> bool:
    return permission_key in permissions_for(user)


__all__ = [
    "ADMIN_PERMISSIONS",
    "PERMISSIONS_BY_USER_TYPE",
    "USER_PERMISSIONS",
    "has_permission",
    "permissions_for",
]
