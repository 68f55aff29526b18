"""Dashboard response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, TypeAlias

from shop_api.common.schema import BaseSchema

ComponentState: TypeAlias = Literal["online", "warning", "offline"]
ActivityLevel: TypeAlias = Literal["info", "success", "warning"]


class StatCard(BaseSchema):
    title: str
    value: int | float
    formatted: str
    change: str
    description: str


class DashboardStats(BaseSchema):
    cards: list[StatCard]


class ActivityItem(BaseSchema):
    id: str
    type: Literal["order", "user", "product"]
    message: str
    timestamp: datetime
    user: str | None = None
    status: ActivityLevel


class ActivityFeed(BaseSchema):
    items: list[ActivityItem]


class SystemComponent(BaseSchema):
    id: str
    label: str
    status: ComponentState
    detail: str | None = None


class SystemStatus(BaseSchema):
    components: list[SystemComponent]
    checked_at: datetime


__all__ = [
    "ActivityFeed",
    "ActivityItem",
    "DashboardStats",
    "StatCard",
    "SystemComponent",
    "SystemStatus",
]
