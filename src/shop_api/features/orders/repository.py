"""Query helpers for ``Order`` rows."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from shop_api.common.search import LIKE_ESCAPE, escape_like
from shop_db.models import Order, OrderStatus, OrderStatusHistory


class OrdersRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, order_id: UUID) -> Order | None:
        return self._session.get(Order, order_id)

    def list_stmt(
        self,
        *,
        user_id: UUID | None = None,
        status: OrderStatus | None = None,
        order_number: str | None = None,
        created_from: datetime | None = None,
        created_before: datetime | None = None,
    ) -> Select:
        stmt = select(Order)
        if user_id is not None:
            stmt = stmt.where(Order.user_id == user_id)
        if status is not None:
            stmt = stmt.where(Order.status == status)
        if order_number:
            pattern = f"%{escape_like(order_number)}%"
            stmt = stmt.where(Order.order_number.ilike(pattern, escape=LIKE_ESCAPE))
        if created_from is not None:
            stmt = stmt.where(Order.created_at >= created_from)
        if created_before is not None:
            stmt = stmt.where(Order.created_at < created_before)
        return stmt

    def count_by_status(self) -> dict[OrderStatus, int]:
        stmt = select(Order.status, func.count(Order.id)).group_by(Order.status)
        return {OrderStatus(row[0]): int(row[1]) for row in self._session.execute(stmt)}

    def status_history(self, order_id: UUID) -> list[OrderStatusHistory]:
        stmt = (
            select(OrderStatusHistory)
            .where(OrderStatusHistory.order_id == order_id)
            .order_by(OrderStatusHistory.created_at.asc(), OrderStatusHistory.id.asc())
        )
        return list(self._session.execute(stmt).scalars().all())


__all__ = ["OrdersRepository"]
