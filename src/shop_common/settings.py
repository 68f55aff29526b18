"""Shared settings helpers and mixins for shop services."""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache
from typing import Literal, Protocol, TypeVar

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from shop_common.paths import DATA_ROOT, REPO_ROOT

ALLOWED_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
ALLOWED_LOG_FORMATS = frozenset({"console", "json"})
DEFAULT_DATABASE_URL = f"sqlite:///{(DATA_ROOT / 'db' / 'shop.sqlite').as_posix()}"


def shop_settings_config(
    *,
    enable_decoding: bool = True,
    populate_by_name: bool = False,
) -> SettingsConfigDict:
    """Return the standard shop ``BaseSettings`` config dict."""

    return SettingsConfigDict(
        env_file=str(REPO_ROOT / ".env"),
        env_file_encoding="utf-8",
        env_prefix="SHOP_",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        enable_decoding=enable_decoding,
        populate_by_name=populate_by_name,
        str_strip_whitespace=True,
    )


T = TypeVar("T")


def create_settings_accessors(
    settings_type: type[T],
) -> tuple[Callable[[], T], Callable[[], T]]:
    """Create ``get_settings`` and ``reload_settings`` helpers for a settings class."""

    @lru_cache(maxsize=1)
    def _build() -> T:
        return settings_type()

    def get_settings() -> T:
        return _build()

    def reload_settings() -> T:
        _build.cache_clear()
        return _build()

    return get_settings, reload_settings


def normalize_log_format(value: str, *, env_var: str = "SHOP_LOG_FORMAT") -> str:
    normalized = value.strip().lower()
    if normalized not in ALLOWED_LOG_FORMATS:
        allowed = ", ".join(sorted(ALLOWED_LOG_FORMATS))
        raise ValueError(f"{env_var} must be one of: {allowed}.")
    return normalized


def normalize_log_level(value: str | None, *, env_var: str) -> str | None:
    if value is None:
        return None
    normalized = value.strip().upper()
    if normalized not in ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(ALLOWED_LOG_LEVELS))
        raise ValueError(f"{env_var} must be one of: {allowed}.")
    return normalized


class DatabaseSettingsMixin:
    """Shared database settings used by API, worker, and DB tooling."""

    database_url: str = Field(default=DEFAULT_DATABASE_URL, description="SQLAlchemy URL.")
    database_echo: bool = False
    database_pool_size: int = Field(5, ge=1)
    database_max_overflow: int = Field(10, ge=0)
    database_pool_timeout: int = Field(30, gt=0)
    database_pool_recycle: int = Field(1800, ge=0)
    database_sqlite_busy_timeout_ms: int = Field(5000, ge=0)
    database_sqlite_journal_mode: Literal["WAL", "DELETE", "TRUNCATE", "MEMORY"] = "WAL"

    @field_validator("database_url", mode="before")
    @classmethod
    def _normalize_database_url(cls, value: object) -> object:
        if value is None:
            return DEFAULT_DATABASE_URL
        raw = str(value).strip()
        if not raw:
            raise ValueError("SHOP_DATABASE_URL must not be empty.")
        if raw.startswith("postgres://"):
            raw = "postgresql+psycopg://" + raw.removeprefix("postgres://")
        elif raw.startswith("postgresql://"):
            raw = "postgresql+psycopg://" + raw.removeprefix("postgresql://")
        return raw

    @field_validator("database_sqlite_journal_mode", mode="before")
    @classmethod
    def _normalize_journal_mode(cls, value: object) -> object:
        if value is None:
            return "WAL"
        return str(value).strip().upper()


class DatabaseSettingsProtocol(Protocol):
    """Structural type for database settings consumed across package boundaries."""

    database_url: str
    database_echo: bool
    database_pool_size: int
    database_max_overflow: int
    database_pool_timeout: int
    database_pool_recycle: int
    database_sqlite_busy_timeout_ms: int
    database_sqlite_journal_mode: str


__all__ = [
    "ALLOWED_LOG_FORMATS",
    "ALLOWED_LOG_LEVELS",
    "DEFAULT_DATABASE_URL",
    "DatabaseSettingsMixin",
    "DatabaseSettingsProtocol",
    "create_settings_accessors",
    "normalize_log_format",
    "normalize_log_level",
    "shop_settings_config",
]
