from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field, SecretStr, field_validator, model_validator

from shop_api.common.schema import BaseSchema
from shop_api.common.validators import validate_timezone


class UserSettingsOut(BaseSchema):
    id: UUID
    user_id: UUID
    email_notifications: bool
    push_notifications: bool
    sms_notifications: bool
    marketing_notifications: bool
    order_update_notifications: bool
    newsletter_notifications: bool
    created_at: datetime
    updated_at: datetime


class NotificationPreferencesUpdate(BaseSchema):
    """Short field names map onto the ``*_notifications`` columns."""

    email: bool | None = None
    push: bool | None = None
    sms: bool | None = None
    marketing: bool | None = None
    order_updates: bool | None = None
    newsletter: bool | None = None

    @model_validator(mode="after")
    def _ensure_changes_present(self) -> NotificationPreferencesUpdate:
        if not self.model_fields_set:
            raise ValueError("Provide at least one field to update.")
        return self

    def column_changes(self) -> dict[str, bool]:
        mapping = {
            "email": "email_notifications",
            "push": "push_notifications",
            "sms": "sms_notifications",
            "marketing": "marketing_notifications",
            "order_updates": "order_update_notifications",
            "newsletter": "newsletter_notifications",
        }
        return {
            mapping[field]: value
            for field, value in self.model_dump(exclude_unset=True).items()
        }


class LocalePreferencesUpdate(BaseSchema):
    language_id: UUID | None = None
    timezone: str | None = Field(default=None, max_length=64)

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return validate_timezone(value)

    @model_validator(mode="after")
    def _ensure_changes_present(self) -> LocalePreferencesUpdate:
        if not self.model_fields_set:
            raise ValueError("Provide at least one field to update.")
        return self


class LocalePreferencesOut(BaseSchema):
    language_id: UUID | None = None
    timezone: str | None = None


class PasswordChangeRequest(BaseSchema):
    current_password: SecretStr
    new_password: SecretStr
    new_password_confirmation: SecretStr


__all__ = [
    "LocalePreferencesOut",
    "LocalePreferencesUpdate",
    "NotificationPreferencesUpdate",
    "PasswordChangeRequest",
    "UserSettingsOut",
]
