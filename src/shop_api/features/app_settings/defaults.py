"""Seeded application settings and their defaults."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from shop_db.models import SettingGroup, SettingType


@dataclass(frozen=True, slots=True)
class SettingDefault:
    key: str
    group: SettingGroup
    type: SettingType
    value: Any
    description: str


DEFAULT_SETTINGS: tuple[SettingDefault, ...] = (
    SettingDefault(
        "default_currency", SettingGroup.COMMERCE, SettingType.STRING, "₺",
        "Currency symbol used in prices and emails",
    ),
    SettingDefault(
        "default_language", SettingGroup.LOCALIZATION, SettingType.STRING, "tr",
        "Default language code",
    ),
    SettingDefault(
        "default_country", SettingGroup.LOCALIZATION, SettingType.STRING, "TR",
        "Default country code",
    ),
    SettingDefault(
        "default_timezone", SettingGroup.LOCALIZATION, SettingType.STRING, "Europe/Istanbul",
        "Default timezone",
    ),
    SettingDefault(
        "maintenance_mode", SettingGroup.SYSTEM, SettingType.BOOLEAN, False,
        "Put the storefront in maintenance mode",
    ),
    SettingDefault(
        "app_name", SettingGroup.SYSTEM, SettingType.STRING, "Ecommerce",
        "Application name",
    ),
    SettingDefault(
        "app_url", SettingGroup.SYSTEM, SettingType.STRING, "http://localhost:8080",
        "Public storefront URL",
    ),
    SettingDefault(
        "items_per_page", SettingGroup.UI, SettingType.INTEGER, 20,
        "Default page size for listings",
    ),
    SettingDefault(
        "theme", SettingGroup.UI, SettingType.STRING, "default",
        "Storefront theme",
    ),
    SettingDefault(
        "logo_url", SettingGroup.UI, SettingType.STRING, "/images/logo.png",
        "Logo location",
    ),
    SettingDefault(
        "email_notifications_enabled", SettingGroup.NOTIFICATION, SettingType.BOOLEAN, True,
        "Send notification emails",
    ),
    SettingDefault(
        "sms_notifications_enabled", SettingGroup.NOTIFICATION, SettingType.BOOLEAN, False,
        "Send SMS notifications",
    ),
)

DEFAULTS_BY_KEY: dict[str, SettingDefault] = {item.key: item for item in DEFAULT_SETTINGS}

__all__ = ["DEFAULTS_BY_KEY", "DEFAULT_SETTINGS", "SettingDefault"]
