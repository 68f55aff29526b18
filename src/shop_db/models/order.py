"""Orders, line items, and the status audit trail."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shop_db import (
    GUID,
    Base,
    TimestampMixin,
    UTCDateTime,
    UUIDPrimaryKeyMixin,
    enum_values,
    utc_now,
)

if TYPE_CHECKING:
    from .user import User


class OrderStatus(str, enum.Enum):
    """Order lifecycle states."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def allowed_transitions(self) -> frozenset[OrderStatus]:
        return ORDER_STATUS_TRANSITIONS[self]

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in ORDER_STATUS_TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return not ORDER_STATUS_TRANSITIONS[self]


ORDER_STATUS_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.REFUNDED}),
    OrderStatus.CANCELLED: frozenset({OrderStatus.REFUNDED}),
    OrderStatus.REFUNDED: frozenset(),
}

_order_status_enum = SAEnum(
    OrderStatus,
    name="order_status",
    native_enum=False,
    length=20,
    values_callable=enum_values,
)


class Order(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Customer order; amounts are in minor currency units."""

    __tablename__ = "orders"

    user_id: Mapped[UUID] = mapped_column(
        GUID(),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    order_number: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    status: Mapped[OrderStatus] = mapped_column(
        _order_status_enum,
        nullable=False,
        default=OrderStatus.PENDING,
    )
    total_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    shipping_address: Mapped[str] = mapped_column(Text(), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text(), nullable=True)
    shipped_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    delivered_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    # Transient note copied onto the next status history row.
    status_note = None

    user: Mapped[User] = relationship("User", lazy="selectin")
    items: Mapped[list[OrderItem]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    status_history: Mapped[list[OrderStatusHistory]] = relationship(
        "OrderStatusHistory",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderStatusHistory.created_at",
    )

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="total_non_negative"),
        Index("ix_orders_user_id_created_at", "user_id", "created_at"),
        Index("ix_orders_status", "status"),
    )

    @property
    def status_label(self) -> str:
        return OrderStatus(self.status).label


class OrderItem(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Line item snapshot taken when the order is placed."""

    __tablename__ = "order_items"

    order_id: Mapped[UUID] = mapped_column(
        GUID(),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
    )
    product_id: Mapped[UUID | None] = mapped_column(
        GUID(),
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
    )
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    product_sku: Mapped[str | None] = mapped_column(String(50), nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[int] = mapped_column(Integer, nullable=False)
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)

    order: Mapped[Order] = relationship("Order", back_populates="items")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="quantity_positive"),
        Index("ix_order_items_order_id", "order_id"),
    )


class OrderStatusHistory(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "order_status_histories"

    order_id: Mapped[UUID] = mapped_column(
        GUID(),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
    )
    old_status: Mapped[OrderStatus | None] = mapped_column(_order_status_enum, nullable=True)
    new_status: Mapped[OrderStatus] = mapped_column(_order_status_enum, nullable=False)
    changed_by_id: Mapped[UUID | None] = mapped_column(
        GUID(),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(Text(), nullable=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utc_now)

    order: Mapped[Order] = relationship("Order", back_populates="status_history")
    changed_by: Mapped[User | None] = relationship("User", lazy="selectin")

    __table_args__ = (
        Index("ix_order_status_histories_order_id_created_at", "order_id", "created_at"),
    )


__all__ = [
    "ORDER_STATUS_TRANSITIONS",
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderStatusHistory",
]
