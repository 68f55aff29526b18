"""Central exports for shop SQLAlchemy models."""

from .address import Address, AddressType
from .application_setting import (
    ApplicationSetting,
    SettingGroup,
    SettingType,
    cast_setting_value,
)
from .audit_log import AuditAction, AuditLog
from .authn import AuthSession
from .cart import Cart, CartItem
from .catalog import Category, Product, ShippingMethod
from .locale import (
    Country,
    CountryCode,
    Currency,
    CurrencyCode,
    Language,
    LanguageCode,
    TextDirection,
)
from .mail_job import MailJob, MailJobStatus
from .order import (
    ORDER_STATUS_TRANSITIONS,
    Order,
    OrderItem,
    OrderStatus,
    OrderStatusHistory,
)
from .user import User, UserType
from .user_settings import DEFAULT_NOTIFICATION_PREFERENCES, UserSettings

# Registers the before_flush hooks once models are importable.
from .. import events as _events  # noqa: E402,F401

__all__ = [
    "DEFAULT_NOTIFICATION_PREFERENCES",
    "ORDER_STATUS_TRANSITIONS",
    "Address",
    "AddressType",
    "ApplicationSetting",
    "AuditAction",
    "AuditLog",
    "AuthSession",
    "Cart",
    "CartItem",
    "Category",
    "Country",
    "CountryCode",
    "Currency",
    "CurrencyCode",
    "Language",
    "LanguageCode",
    "MailJob",
    "MailJobStatus",
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderStatusHistory",
    "Product",
    "SettingGroup",
    "SettingType",
    "ShippingMethod",
    "TextDirection",
    "User",
    "UserSettings",
    "UserType",
    "cast_setting_value",
]
