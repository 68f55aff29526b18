"""Aggregate metrics for the admin dashboard."""

from __future__ import annotations

import logging
import shutil
from datetime import datetime
from pathlib import Path

from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shop_api.common.money import format_amount, to_units
from shop_api.common.time import previous_month_start, start_of_month, utc_now
from shop_api.features.app_settings.repository import ApplicationSettingsRepository
from shop_api.settings import Settings
from shop_db.models import Order, OrderStatus, OrderStatusHistory, Product, User

from .schemas import (
    ActivityFeed,
    ActivityItem,
    ComponentState,
    DashboardStats,
    StatCard,
    SystemComponent,
    SystemStatus,
)

logger = logging.getLogger(__name__)

ACTIVITY_LIMIT = 10
RECENT_ORDER_EVENTS = 10
RECENT_REGISTRATIONS = 3
RECENT_PRODUCT_UPDATES = 2

STORAGE_WARNING_PERCENT = 75
STORAGE_OFFLINE_PERCENT = 90


def format_change(current: float, previous: float) -> str:
    """Render the month-over-month change as a signed percentage."""

    if previous == 0:
        return "+100%" if current > 0 else "0%"
    change = (current - previous) / previous * 100
    sign = "+" if change >= 0 else ""
    return f"{sign}{change:.1f}%"


def storage_state(percent: int) -> ComponentState:
    if percent >= STORAGE_OFFLINE_PERCENT:
        return "offline"
    if percent >= STORAGE_WARNING_PERCENT:
        return "warning"
    return "online"


def _order_message(history: OrderStatusHistory) -> tuple[str, str]:
    order = history.order
    number = order.order_number
    customer = order.user.name if order.user is not None else "Unknown User"
    actor = history.changed_by.name if history.changed_by is not None else "System"
    new_status = OrderStatus(history.new_status)

    match new_status:
        case OrderStatus.PENDING if history.old_status is None:
            return f"{customer} placed a new order #{number}", "info"
        case OrderStatus.PENDING:
            return f"Order #{number} status changed to pending by {actor}", "info"
        case OrderStatus.CONFIRMED:
            return f"Order #{number} was confirmed by {actor}", "success"
        case OrderStatus.PROCESSING:
            return f"Order #{number} is now being processed by {actor}", "info"
        case OrderStatus.SHIPPED:
            return f"Order #{number} has been shipped to {customer}", "success"
        case OrderStatus.DELIVERED:
            return f"Order #{number} was successfully delivered to {customer}", "success"
        case OrderStatus.CANCELLED:
            return f"Order #{number} was cancelled by {actor}", "warning"
        case _:
            return f"Order #{number} status updated by {actor}", "info"


class DashboardService:
    def __init__(self, *, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings

    # Stats ---------------------------------------------------------------

    def stats(self, *, now: datetime | None = None) -> DashboardStats:
        now = now or utc_now()
        month_start = start_of_month(now)
        last_month_start = previous_month_start(now)

        total_users = self._count(select(func.count(User.id)))
        users_before = self._count(
            select(func.count(User.id)).where(User.created_at < month_start)
        )

        orders_now = self._count_between(Order, Order.created_at, month_start, None)
        orders_before = self._count_between(Order, Order.created_at, last_month_start, month_start)

        live_products = select(func.count(Product.id)).where(Product.deleted_at.is_(None))
        total_products = self._count(live_products)
        products_now = self._count(live_products.where(Product.created_at >= month_start))
        products_before = self._count(
            live_products.where(
                Product.created_at >= last_month_start,
                Product.created_at < month_start,
            )
        )

        revenue_now = self._revenue(month_start, None)
        revenue_before = self._revenue(last_month_start, month_start)
        symbol = str(ApplicationSettingsRepository(self._session).value("default_currency") or "")

        cards = [
            StatCard(
                title="Total Users",
                value=total_users,
                formatted=f"{total_users:,}",
                change=format_change(total_users, users_before),
                description="Registered users",
            ),
            StatCard(
                title="Orders",
                value=orders_now,
                formatted=f"{orders_now:,}",
                change=format_change(orders_now, orders_before),
                description="Orders placed this month",
            ),
            StatCard(
                title="Products",
                value=total_products,
                formatted=f"{total_products:,}",
                change=format_change(products_now, products_before),
                description="Total products in inventory",
            ),
            StatCard(
                title="Revenue",
                value=to_units(revenue_now),
                formatted=format_amount(revenue_now, symbol),
                change=format_change(revenue_now, revenue_before),
                description="Delivered order revenue this month",
            ),
        ]
        return DashboardStats(cards=cards)

    def _count(self, stmt) -> int:
        return int(self._session.execute(stmt).scalar_one() or 0)

    def _count_between(self, model, column, start: datetime, end: datetime | None) -> int:
        stmt = select(func.count(model.id)).where(column >= start)
        if end is not None:
            stmt = stmt.where(column < end)
        return self._count(stmt)

    def _revenue(self, start: datetime, end: datetime | None) -> int:
        stmt = select(func.coalesce(func.sum(Order.total_amount), 0)).where(
            Order.status == OrderStatus.DELIVERED,
            Order.created_at >= start,
        )
        if end is not None:
            stmt = stmt.where(Order.created_at < end)
        return self._count(stmt)

    # Activity ------------------------------------------------------------

    def activity(self) -> ActivityFeed:
        items: list[ActivityItem] = []

        history_stmt = (
            select(OrderStatusHistory)
            .order_by(OrderStatusHistory.created_at.desc())
            .limit(RECENT_ORDER_EVENTS)
        )
        for history in self._session.execute(history_stmt).scalars():
            message, level = _order_message(history)
            owner = history.order.user
            items.append(
                ActivityItem(
                    id=str(history.id),
                    type="order",
                    message=message,
                    timestamp=history.created_at,
                    user=owner.name if owner is not None else None,
                    status=level,
                )
            )

        users_stmt = select(User).order_by(User.created_at.desc()).limit(RECENT_REGISTRATIONS)
        app_name = ApplicationSettingsRepository(self._session).value("app_name")
        for user in self._session.execute(users_stmt).scalars():
            items.append(
                ActivityItem(
                    id=f"user_{user.id}",
                    type="user",
                    message=f"{user.name} joined {app_name}",
                    timestamp=user.created_at,
                    user=user.name,
                    status="info",
                )
            )

        products_stmt = (
            select(Product)
            .where(Product.deleted_at.is_(None))
            .order_by(Product.updated_at.desc())
            .limit(RECENT_PRODUCT_UPDATES)
        )
        for product in self._session.execute(products_stmt).scalars():
            items.append(
                ActivityItem(
                    id=f"product_{product.id}",
                    type="product",
                    message=f'Product "{product.name}" was updated',
                    timestamp=product.updated_at,
                    status="info",
                )
            )

        items.sort(key=lambda item: item.timestamp, reverse=True)
        return ActivityFeed(items=items[:ACTIVITY_LIMIT])

    # System status -------------------------------------------------------

    def system_status(self) -> SystemStatus:
        components = [
            SystemComponent(id="server", label="Server Status", status="online"),
            SystemComponent(id="database", label="Database", status=self._database_state()),
            self._storage_component(),
        ]
        return SystemStatus(components=components, checked_at=utc_now())

    def _database_state(self) -> ComponentState:
        try:
            self._session.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.warning("dashboard.database.offline", exc_info=True)
            return "offline"
        return "online"

    def _storage_component(self) -> SystemComponent:
        target = Path(self._settings.storage_path)
        while not target.exists() and target != target.parent:
            target = target.parent
        try:
            usage = shutil.disk_usage(target)
        except OSError:
            logger.warning("dashboard.storage.unavailable", extra={"path": str(target)})
            return SystemComponent(
                id="storage", label="Storage Usage", status="offline", detail="unavailable"
            )
        percent = round(usage.used / usage.total * 100) if usage.total else 0
        return SystemComponent(
            id="storage",
            label="Storage Usage",
            status=storage_state(percent),
            detail=f"{percent}% used",
        )


__all__ = ["DashboardService", "format_change", "storage_state"]
