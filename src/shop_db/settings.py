"""Database-only settings for migrations and DB tooling."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from shop_common.settings import (
    DatabaseSettingsMixin,
    DatabaseSettingsProtocol,
    create_settings_accessors,
    shop_settings_config,
)

DatabaseSettings = DatabaseSettingsProtocol


class Settings(DatabaseSettingsMixin, BaseSettings):
    """Settings required for database engine and migrations."""

    model_config = shop_settings_config()


get_settings, reload_settings = create_settings_accessors(Settings)


__all__ = ["DatabaseSettings", "Settings", "get_settings", "reload_settings"]
