"""Template payload builders for notification emails.

Payloads carry display-ready strings so the mail worker only renders them.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from shop_api.common.money import format_amount
from shop_db.models import Order, OrderStatus, User

ESTIMATED_DELIVERY_DAYS = 3
DATETIME_FORMAT = "%b %d, %Y at %I:%M %p"
DATE_FORMAT = "%b %d, %Y"


def format_datetime(value: datetime | None) -> str | None:
    return value.strftime(DATETIME_FORMAT) if value is not None else None


def format_date(value: datetime | None) -> str | None:
    return value.strftime(DATE_FORMAT) if value is not None else None


def display_order_number(order: Order) -> str:
    """Short customer-facing reference: first 8 chars of the order id."""

    return str(order.id).replace("-", "")[:8].upper()


def welcome_payload(user: User, *, app_name: str, app_url: str) -> dict[str, Any]:
    return {
        "name": user.name,
        "email": user.email,
        "app_name": app_name,
        "app_url": app_url,
    }


def order_confirmation_payload(
    order: Order,
    *,
    currency_symbol: str,
    app_name: str,
    app_url: str,
) -> dict[str, Any]:
    reference = display_order_number(order)
    return {
        "customer_name": order.user.name,
        "order_number": reference,
        "order_title": f"Order #{reference}",
        "status_label": OrderStatus(order.status).label,
        "total_amount_formatted": format_amount(order.total_amount, currency_symbol),
        "order_date_formatted": format_datetime(order.created_at),
        "estimated_delivery_formatted": format_date(
            order.created_at + timedelta(days=ESTIMATED_DELIVERY_DAYS)
        ),
        "shipping_address": order.shipping_address,
        "items": [
            {
                "label": f"{item.product_name} (x{item.quantity})",
                "value": format_amount(item.total_price, currency_symbol),
            }
            for item in order.items
        ],
        "app_name": app_name,
        "order_url": f"{app_url}/account/orders/{order.id}",
    }


def order_status_update_payload(
    order: Order,
    *,
    old_status: OrderStatus,
    new_status: OrderStatus,
    currency_symbol: str,
    app_name: str,
) -> dict[str, Any]:
    status_dates: list[dict[str, str]] = []
    if order.shipped_at is not None and new_status is OrderStatus.SHIPPED:
        status_dates.append(
            {"label": "Shipped Date", "value": format_datetime(order.shipped_at) or ""}
        )
    if order.delivered_at is not None and new_status is OrderStatus.DELIVERED:
        status_dates.append(
            {"label": "Delivered Date", "value": format_datetime(order.delivered_at) or ""}
        )
    return {
        "customer_name": order.user.name,
        "order_number": display_order_number(order),
        "total_amount_formatted": format_amount(order.total_amount, currency_symbol),
        "order_date_formatted": format_datetime(order.created_at),
        "old_status": old_status.value,
        "old_status_label": old_status.label,
        "new_status": new_status.value,
        "new_status_label": new_status.label,
        "items": [
            {
                "label": item.product_name,
                "value": f"{item.quantity}x {format_amount(item.unit_price, currency_symbol)}",
            }
            for item in order.items
        ],
        "status_dates": status_dates,
        "app_name": app_name,
    }


__all__ = [
    "DATETIME_FORMAT",
    "DATE_FORMAT",
    "ESTIMATED_DELIVERY_DAYS",
    "display_order_number",
    "format_date",
    "format_datetime",
    "order_confirmation_payload",
    "order_status_update_payload",
    "welcome_payload",
]
