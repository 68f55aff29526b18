"""Shared database schema + migrations for the shop backend."""

from .base import (
    NAMING_CONVENTION,
    Base,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
    metadata,
    utc_now,
)
from .settings import Settings, get_settings, reload_settings
from .types import GUID, JSONType, UTCDateTime, enum_values

__all__ = [
    "Base",
    "metadata",
    "NAMING_CONVENTION",
    "GUID",
    "JSONType",
    "UTCDateTime",
    "enum_values",
    "UUIDPrimaryKeyMixin",
    "TimestampMixin",
    "SoftDeleteMixin",
    "utc_now",
    "Settings",
    "get_settings",
    "reload_settings",
]
