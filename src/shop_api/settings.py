"""Shop API settings (conventional Pydantic v2)."""

from __future__ import annotations

import json
from datetime import timedelta
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings

from shop_common.paths import DATA_ROOT
from shop_common.settings import (
    DatabaseSettingsMixin,
    create_settings_accessors,
    normalize_log_format,
    normalize_log_level,
    shop_settings_config,
)

# ---- Defaults ---------------------------------------------------------------

DEFAULT_PUBLIC_WEB_URL = "http://localhost:8080"
DEFAULT_CORS_ORIGINS: list[str] = []

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
MAX_SORT_FIELDS = 3
MIN_SEARCH_LEN = 2
MAX_SEARCH_LEN = 128
COUNT_STATEMENT_TIMEOUT_MS: int | None = None  # optional (Postgres), e.g., 500


# ---- Settings ---------------------------------------------------------------


class Settings(DatabaseSettingsMixin, BaseSettings):
    """FastAPI settings loaded from SHOP_* environment variables."""

    model_config = shop_settings_config(enable_decoding=False, populate_by_name=True)

    # Core
    app_name: str = "Shop Back Office API"
    app_version: str = "unknown"
    api_docs_enabled: bool = True
    log_format: str = "console"
    log_level: str = "INFO"
    api_log_level: str | None = None
    request_log_level: str | None = None
    access_log_enabled: bool = True
    access_log_level: str | None = None

    # Server
    public_web_url: str = DEFAULT_PUBLIC_WEB_URL
    api_host: str = "0.0.0.0"
    api_port: int = Field(8000, ge=1, le=65535)
    api_threadpool_tokens: int = Field(40, ge=1)
    server_cors_origins: list[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    # Database
    database_log_level: str | None = None
    database_migrate_on_startup: bool = False

    # Sessions
    session_cookie_name: str = "shop_session"
    session_csrf_cookie_name: str = "shop_csrf"
    session_cookie_domain: str | None = None
    session_cookie_path: str = "/"
    session_cookie_secure: bool | None = None
    session_cookie_samesite: Literal["lax", "strict", "none"] = "lax"
    session_access_ttl: timedelta = Field(default=timedelta(days=14))

    # Auth policy
    failed_login_lock_threshold: int = Field(5, ge=1)
    failed_login_lock_duration: timedelta = Field(default=timedelta(minutes=5))
    allow_public_registration: bool = True
    auth_password_min_length: int = Field(8, ge=8, le=128)

    # Notifications
    mail_max_attempts: int = Field(5, ge=1)

    # Dashboard
    storage_path: Path = Field(default=DATA_ROOT)

    # ---- Validators ----

    @field_validator("server_cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, value: object) -> object:
        if value is None:
            return value
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                return []
            if raw.startswith("["):
                try:
                    parsed = json.loads(raw)
                except json.JSONDecodeError:
                    parsed = None
                if isinstance(parsed, list):
                    return parsed
            return [item.strip() for item in raw.split(",") if item.strip()]
        if isinstance(value, tuple):
            return list(value)
        return value

    @model_validator(mode="after")
    def _finalize(self) -> Settings:
        self.log_format = normalize_log_format(self.log_format, env_var="SHOP_LOG_FORMAT")

        normalized_log_level = normalize_log_level(self.log_level, env_var="SHOP_LOG_LEVEL")
        if normalized_log_level is None:
            raise ValueError("SHOP_LOG_LEVEL must not be empty.")
        self.log_level = normalized_log_level

        self.api_log_level = normalize_log_level(self.api_log_level, env_var="SHOP_API_LOG_LEVEL")
        self.request_log_level = normalize_log_level(
            self.request_log_level,
            env_var="SHOP_REQUEST_LOG_LEVEL",
        )
        self.access_log_level = normalize_log_level(
            self.access_log_level,
            env_var="SHOP_ACCESS_LOG_LEVEL",
        )
        self.database_log_level = normalize_log_level(
            self.database_log_level,
            env_var="SHOP_DATABASE_LOG_LEVEL",
        )

        self.public_web_url = self.public_web_url.rstrip("/")
        return self

    # ---- Convenience ----

    @property
    def effective_api_log_level(self) -> str:
        return self.api_log_level or self.log_level

    @property
    def effective_request_log_level(self) -> str:
        return self.request_log_level or self.effective_api_log_level

    @property
    def effective_access_log_level(self) -> str:
        return self.access_log_level or self.effective_api_log_level


get_settings, reload_settings = create_settings_accessors(Settings)


__all__ = [
    "COUNT_STATEMENT_TIMEOUT_MS",
    "DEFAULT_CORS_ORIGINS",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_PUBLIC_WEB_URL",
    "MAX_PAGE_SIZE",
    "MAX_SEARCH_LEN",
    "MAX_SORT_FIELDS",
    "MIN_SEARCH_LEN",
    "Settings",
    "get_settings",
    "reload_settings",
]
