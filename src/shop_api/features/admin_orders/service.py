"""Back-office order listing, statistics and status management."""

from __future__ import annotations

import logging
from datetime import date, datetime
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from shop_api.common.logging import log_context
from shop_api.common.pagination import paginate_sql
from shop_api.common.time import end_of_day, start_of_day
from shop_api.common.types import OrderBy
from shop_api.features.notifications.service import NotificationsService
from shop_api.features.orders.repository import OrdersRepository
from shop_api.features.orders.schemas import OrderStatusHistoryOut
from shop_api.features.orders.service import transition_order
from shop_api.settings import Settings
from shop_db.models import Order, OrderStatus, User

from .schemas import (
    AdminOrderOut,
    AdminOrderPage,
    OrderStatistics,
    OrderStatusLog,
    OrderStatusUpdate,
    OrderTimeline,
    TimelineEntry,
)

logger = logging.getLogger(__name__)

DEFAULT_STATUS_NOTE = "Status updated via admin panel"


def admin_order_out(order: Order) -> AdminOrderOut:
    out = AdminOrderOut.model_validate(order, from_attributes=True)
    if order.user is not None:
        out.customer_name = order.user.name
        out.customer_email = order.user.email
    return out


def build_timeline(order: Order) -> list[TimelineEntry]:
    """Reconstruct a readable status timeline from the order's timestamps."""

    current = OrderStatus(order.status)
    entries = [_entry(OrderStatus.PENDING, order.created_at, "Order placed")]
    if current is not OrderStatus.PENDING and order.updated_at > order.created_at:
        entries.append(
            _entry(OrderStatus.PROCESSING, order.updated_at, "Order confirmed and processing")
        )
    if order.shipped_at is not None:
        entries.append(_entry(OrderStatus.SHIPPED, order.shipped_at, "Order shipped"))
    if order.delivered_at is not None:
        entries.append(_entry(OrderStatus.DELIVERED, order.delivered_at, "Order delivered"))
    if entries[-1].status != current.value:
        entries.append(
            _entry(current, order.updated_at, f"Order status updated to {current.label}")
        )
    return entries


def _entry(value: OrderStatus, at: datetime, note: str) -> TimelineEntry:
    return TimelineEntry(status=value, label=value.label, timestamp=at, note=note)


class AdminOrdersService:
    def __init__(self, *, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._repo = OrdersRepository(session)
        self._notifications = NotificationsService(session=session, settings=settings)

    def list_orders(
        self,
        *,
        order_status: OrderStatus | None,
        user_id: UUID | None,
        order_number: str | None,
        date_from: date | None,
        date_to: date | None,
        page: int,
        per_page: int,
        order_by: OrderBy,
    ) -> AdminOrderPage:
        stmt = self._repo.list_stmt(
            user_id=user_id,
            status=order_status,
            order_number=order_number,
            created_from=start_of_day(date_from) if date_from else None,
            created_before=end_of_day(date_to) if date_to else None,
        )
        result = paginate_sql(
            self._session, stmt, page=page, per_page=per_page, order_by=order_by
        )
        return result.map_into(AdminOrderPage, admin_order_out)

    def get_order(self, order_id: UUID) -> AdminOrderOut:
        return admin_order_out(self._require(order_id))

    def statistics(self) -> OrderStatistics:
        counts = self._repo.count_by_status()
        return OrderStatistics(
            total=sum(counts.values()),
            pending=counts.get(OrderStatus.PENDING, 0),
            processing=counts.get(OrderStatus.PROCESSING, 0),
            shipped=counts.get(OrderStatus.SHIPPED, 0),
            delivered=counts.get(OrderStatus.DELIVERED, 0),
            cancelled=counts.get(OrderStatus.CANCELLED, 0),
        )

    def update_status(
        self, order_id: UUID, payload: OrderStatusUpdate, *, actor: User
    ) -> AdminOrderOut:
        order = self._require(order_id)
        target = OrderStatus(payload.status)
        logger.debug(
            "admin_orders.status.start",
            extra=log_context(user_id=actor.id, order_id=order.id, target=target.value),
        )
        old_status = transition_order(
            self._session,
            order,
            target,
            notes=payload.notes or DEFAULT_STATUS_NOTE,
        )
        self._notifications.queue_order_status_update(
            order, old_status=old_status, new_status=target
        )
        logger.info(
            "admin_orders.status.success",
            extra=log_context(
                user_id=actor.id,
                order_id=order.id,
                previous=old_status.value,
                current=target.value,
            ),
        )
        return admin_order_out(order)

    def timeline(self, order_id: UUID) -> OrderTimeline:
        order = self._require(order_id)
        return OrderTimeline(
            order_id=order.id,
            current_status=OrderStatus(order.status),
            history=build_timeline(order),
        )

    def status_log(self, order_id: UUID) -> OrderStatusLog:
        order = self._require(order_id)
        rows = self._repo.status_history(order.id)
        return OrderStatusLog(
            order_id=order.id,
            entries=[OrderStatusHistoryOut.model_validate(row) for row in rows],
        )

    def _require(self, order_id: UUID) -> Order:
        order = self._repo.get(order_id)
        if order is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Order not found.")
        return order


__all__ = ["AdminOrdersService", "DEFAULT_STATUS_NOTE", "admin_order_out", "build_timeline"]
