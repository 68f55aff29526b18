"""Schemas for the admin order endpoints."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from shop_api.common.pagination import Page
from shop_api.common.schema import BaseSchema
from shop_api.features.orders.schemas import OrderOut, OrderStatusHistoryOut
from shop_db.models import OrderStatus


class AdminOrderOut(OrderOut):
    customer_name: str | None = None
    customer_email: str | None = None


class AdminOrderPage(Page[AdminOrderOut]):
    pass


class OrderStatusUpdate(BaseSchema):
    status: OrderStatus
    notes: str | None = Field(default=None, max_length=1000)


class OrderStatistics(BaseSchema):
    total: int = 0
    pending: int = 0
    processing: int = 0
    shipped: int = 0
    delivered: int = 0
    cancelled: int = 0


class TimelineEntry(BaseSchema):
    status: OrderStatus
    label: str
    timestamp: datetime
    note: str


class OrderTimeline(BaseSchema):
    order_id: UUID
    current_status: OrderStatus
    history: list[TimelineEntry]


class OrderStatusLog(BaseSchema):
    order_id: UUID
    entries: list[OrderStatusHistoryOut]


__all__ = [
    "AdminOrderOut",
    "AdminOrderPage",
    "OrderStatistics",
    "OrderStatusLog",
    "OrderStatusUpdate",
    "OrderTimeline",
    "TimelineEntry",
]
