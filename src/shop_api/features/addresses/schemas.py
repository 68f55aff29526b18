from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field, model_validator

from shop_api.common.pagination import Page
from shop_api.common.schema import BaseSchema
from shop_db.models import AddressType


class AddressOut(BaseSchema):
    id: UUID
    user_id: UUID
    type: AddressType
    is_default: bool
    first_name: str
    last_name: str
    full_name: str
    company: str | None = None
    address_line_1: str
    address_line_2: str | None = None
    city: str
    state: str
    postal_code: str
    country_id: UUID
    phone: str | None = None
    created_at: datetime
    updated_at: datetime


class AddressCreate(BaseSchema):
    type: AddressType = AddressType.SHIPPING
    is_default: bool = False
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    address_line_1: str = Field(..., min_length=1, max_length=255)
    address_line_2: str | None = Field(default=None, max_length=255)
    city: str = Field(..., min_length=1, max_length=255)
    state: str = Field(..., min_length=1, max_length=255)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country_id: UUID
    phone: str | None = Field(default=None, max_length=20)


class AddressUpdate(BaseSchema):
    type: AddressType | None = None
    is_default: bool | None = None
    first_name: str | None = Field(default=None, min_length=1, max_length=255)
    last_name: str | None = Field(default=None, min_length=1, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    address_line_1: str | None = Field(default=None, min_length=1, max_length=255)
    address_line_2: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, min_length=1, max_length=255)
    state: str | None = Field(default=None, min_length=1, max_length=255)
    postal_code: str | None = Field(default=None, min_length=1, max_length=20)
    country_id: UUID | None = None
    phone: str | None = Field(default=None, max_length=20)

    @model_validator(mode="after")
    def _ensure_changes_present(self) -> AddressUpdate:
        if not self.model_fields_set:
            raise ValueError("Provide at least one field to update.")
        return self


class AddressPage(Page[AddressOut]):
    pass


__all__ = ["AddressCreate", "AddressOut", "AddressPage", "AddressUpdate"]
