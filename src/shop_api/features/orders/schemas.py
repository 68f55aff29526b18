"""Schemas for orders, line items and status history."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from shop_api.common.pagination import Page
from shop_api.common.schema import BaseSchema
from shop_db.models import OrderStatus


class OrderItemOut(BaseSchema):
    id: UUID
    product_id: UUID | None = None
    product_name: str
    product_sku: str | None = None
    quantity: int
    unit_price: int
    total_price: int


class OrderStatusHistoryOut(BaseSchema):
    id: UUID
    old_status: OrderStatus | None = None
    new_status: OrderStatus
    changed_by_id: UUID | None = None
    notes: str | None = None
    created_at: datetime


class OrderOut(BaseSchema):
    id: UUID
    user_id: UUID
    order_number: str
    status: OrderStatus
    status_label: str
    total_amount: int
    shipping_address: str
    notes: str | None = None
    items: list[OrderItemOut]
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class OrderCreate(BaseSchema):
    shipping_address: str = Field(..., min_length=10, max_length=500)
    notes: str | None = Field(default=None, max_length=1000)

    @field_validator("shipping_address")
    @classmethod
    def _strip_address(cls, value: str) -> str:
        cleaned = value.strip()
        if len(cleaned) < 10:
            raise ValueError("Shipping address must be at least 10 characters.")
        return cleaned


class OrderPage(Page[OrderOut]):
    pass


__all__ = [
    "OrderCreate",
    "OrderItemOut",
    "OrderOut",
    "OrderPage",
    "OrderStatusHistoryOut",
]
