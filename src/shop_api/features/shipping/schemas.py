from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field, model_validator

from shop_api.common.schema import BaseSchema


class ShippingMethodOut(BaseSchema):
    id: UUID
    name: str
    description: str | None = None
    price: int
    min_delivery_days: int
    max_delivery_days: int
    delivery_time: str
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class ShippingMethodCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    price: int = Field(0, ge=0)
    min_delivery_days: int = Field(1, ge=0)
    max_delivery_days: int = Field(1, ge=0)
    is_active: bool = True
    sort_order: int = 0

    @model_validator(mode="after")
    def _check_window(self) -> ShippingMethodCreate:
        if self.max_delivery_days < self.min_delivery_days:
            raise ValueError(
                "max_delivery_days must be greater than or equal to min_delivery_days."
            )
        return self


class ShippingMethodUpdate(BaseSchema):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    price: int | None = Field(default=None, ge=0)
    min_delivery_days: int | None = Field(default=None, ge=0)
    max_delivery_days: int | None = Field(default=None, ge=0)
    is_active: bool | None = None
    sort_order: int | None = None

    @model_validator(mode="after")
    def _ensure_changes_present(self) -> ShippingMethodUpdate:
        if not self.model_fields_set:
            raise ValueError("Provide at least one field to update.")
        return self


class ShippingMethodList(BaseSchema):
    items: list[ShippingMethodOut]


__all__ = [
    "ShippingMethodCreate",
    "ShippingMethodList",
    "ShippingMethodOut",
    "ShippingMethodUpdate",
]
