from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from shop_api.features.admin_orders.service import build_timeline
from shop_db.models import Order, OrderStatus

PLACED = datetime(2024, 5, 1, 9, 0, tzinfo=UTC)


def _order(status: OrderStatus, **fields: object) -> Order:
    values: dict[str, object] = {
        "id": uuid4(),
        "status": status,
        "created_at": PLACED,
        "updated_at": PLACED,
        "total_amount": 1000,
        "shipping_address": "Moda Caddesi 5, Istanbul",
    }
    values.update(fields)
    return Order(**values)


@pytest.mark.parametrize(
    ("current", "target", "allowed"),
    [
        (OrderStatus.PENDING, OrderStatus.CONFIRMED, True),
        (OrderStatus.PENDING, OrderStatus.DELIVERED, False),
        (OrderStatus.PROCESSING, OrderStatus.CANCELLED, True),
        (OrderStatus.SHIPPED, OrderStatus.CANCELLED, False),
        (OrderStatus.CANCELLED, OrderStatus.REFUNDED, True),
        (OrderStatus.REFUNDED, OrderStatus.PENDING, False),
    ],
)
def test_transitions(current: OrderStatus, target: OrderStatus, allowed: bool) -> None:
    assert current.can_transition_to(target) is allowed


def test_refunded_is_terminal() -> None:
    assert OrderStatus.REFUNDED.is_terminal
    assert not OrderStatus.DELIVERED.is_terminal
    assert OrderStatus.SHIPPED.label == "Shipped"


def test_timeline_for_new_order() -> None:
    entries = build_timeline(_order(OrderStatus.PENDING))

    assert [entry.status for entry in entries] == ["pending"]
    assert entries[0].note == "Order placed"


def test_timeline_for_delivered_order() -> None:
    shipped = PLACED + timedelta(days=1)
    delivered = PLACED + timedelta(days=3)
    order = _order(
        OrderStatus.DELIVERED,
        updated_at=delivered,
        shipped_at=shipped,
        delivered_at=delivered,
    )

    entries = build_timeline(order)

    assert [entry.status for entry in entries] == [
        "pending",
        "processing",
        "shipped",
        "delivered",
    ]
    assert entries[2].timestamp == shipped


def test_timeline_appends_current_status_when_missing() -> None:
    cancelled = PLACED + timedelta(hours=2)
    order = _order(OrderStatus.CANCELLED, updated_at=cancelled, cancelled_at=cancelled)

    entries = build_timeline(order)

    assert [entry.status for entry in entries] == ["pending", "processing", "cancelled"]
    assert entries[-1].note == "Order status updated to Cancelled"
