"""Schemas for the authenticated user's profile."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator, model_validator

from shop_api.common.schema import BaseSchema, ResponseSchema
from shop_api.features.locales.schemas import CountryOut, LanguageOut
from shop_db.models import UserType


class UserOut(BaseSchema):
    """Public representation of a user account."""

    id: UUID
    name: str
    email: str
    user_type: UserType
    is_active: bool
    country_id: UUID | None = None
    language_id: UUID | None = None
    timezone: str | None = None
    country: CountryOut | None = None
    language: LanguageOut | None = None
    last_login_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(BaseSchema):
    name: str | None = Field(default=None, min_length=2, max_length=255)
    email: EmailStr | None = None
    old_password: str | None = None
    new_password: str | None = None
    new_password_confirmation: str | None = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = value.strip()
        if len(cleaned) < 2:
            raise ValueError("Name must be at least 2 characters.")
        return cleaned

    @field_validator("email")
    @classmethod
    def _limit_email(cls, value: str | None) -> str | None:
        if value is not None and len(value) > 255:
            raise ValueError("Email must be at most 255 characters.")
        return value

    @model_validator(mode="after")
    def _check_payload(self) -> ProfileUpdate:
        if not self.model_fields_set:
            raise ValueError("Provide at least one field to update.")
        if self.new_password is not None and self.old_password is None:
            raise ValueError("old_password is required to set a new password.")
        if self.old_password is not None and self.new_password is None:
            raise ValueError("new_password is required when old_password is given.")
        return self


class LastOrderSummary(ResponseSchema):
    order_number: str
    total: float
    status: str
    created_at: datetime


class ProfileStats(ResponseSchema):
    total_orders: int
    total_spent: float
    average_order_value: float
    member_since: datetime
    last_order: LastOrderSummary | None = None


__all__ = ["LastOrderSummary", "ProfileStats", "ProfileUpdate", "UserOut"]
