"""API schemas for application settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from shop_api.common.schema import BaseSchema, ResponseSchema


class SettingsUpdateRequest(BaseSchema):
    settings: dict[str, Any] = Field(
        ...,
        min_length=1,
        description="Mapping of setting key to its new value.",
    )


class SettingsGroupedResponse(ResponseSchema):
    """Active settings keyed by group, then by setting key."""

    settings: dict[str, dict[str, Any]]


class SystemStatusResponse(ResponseSchema):
    maintenance_mode: bool
    registration_enabled: bool
    email_notifications: bool
    sms_notifications: bool


__all__ = ["SettingsGroupedResponse", "SettingsUpdateRequest", "SystemStatusResponse"]
