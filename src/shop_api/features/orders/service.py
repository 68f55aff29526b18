"""Checkout and customer-facing order operations."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from shop_api.common.errors import (
    EmptyCartError,
    InvalidStatusTransitionError,
    MinimumOrderAmountError,
)
from shop_api.common.logging import log_context
from shop_api.common.pagination import paginate_sql
from shop_api.common.problem_details import field_error
from shop_api.common.time import utc_now
from shop_api.common.types import OrderBy
from shop_api.features.cart.repository import CartRepository
from shop_api.features.notifications.service import NotificationsService
from shop_api.features.products.repository import ProductsRepository
from shop_api.features.products.service import ensure_stock, is_purchasable
from shop_api.settings import Settings
from shop_db.models import Order, OrderItem, OrderStatus, Product, User

from .repository import OrdersRepository
from .schemas import OrderCreate, OrderOut, OrderPage

logger = logging.getLogger(__name__)

MINIMUM_ORDER_AMOUNT_CENTS = 1000

_STOCK_RELEASING = frozenset({OrderStatus.CANCELLED})


def transition_order(
    session: Session,
    order: Order,
    target: OrderStatus,
    *,
    notes: str | None,
) -> OrderStatus:
    """Move ``order`` to ``target`` and return the previous status.

    The ORM hook records the history row; this stamps lifecycle timestamps
    and returns stock when an order is cancelled.
    """

    current = OrderStatus(order.status)
    if not current.can_transition_to(target):
        raise InvalidStatusTransitionError(current, target)

    now = utc_now()
    order.status_note = notes
    order.status = target
    if target is OrderStatus.SHIPPED:
        order.shipped_at = now
    elif target is OrderStatus.DELIVERED:
        order.delivered_at = now
    elif target is OrderStatus.CANCELLED:
        order.cancelled_at = now

    if target in _STOCK_RELEASING:
        for item in order.items:
            if item.product_id is None:
                continue
            product = session.get(Product, item.product_id)
            if product is not None:
                product.stock_quantity += item.quantity

    session.flush()
    session.refresh(order)
    return current


class OrdersService:
    def __init__(self, *, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._repo = OrdersRepository(session)
        self._notifications = NotificationsService(session=session, settings=settings)

    def create_order(self, user: User, payload: OrderCreate) -> OrderOut:
        logger.debug("orders.create.start", extra=log_context(user_id=user.id))
        cart = CartRepository(self._session).get_for_user(user.id)
        if cart is None or cart.is_empty:
            raise EmptyCartError()

        total = cart.total_amount
        if total < MINIMUM_ORDER_AMOUNT_CENTS:
            raise MinimumOrderAmountError(total=total, minimum=MINIMUM_ORDER_AMOUNT_CENTS)

        products = ProductsRepository(self._session)
        locked: list[tuple[Product, int, int]] = []
        for item in cart.items:
            product = products.get_for_update(item.product_id)
            if product is None or not is_purchasable(product):
                raise field_error(
                    "cart",
                    "A product in the cart is no longer available.",
                    code="product_unavailable",
                )
            ensure_stock(product, item.quantity)
            locked.append((product, item.quantity, item.unit_price))

        order = Order(
            user_id=user.id,
            status=OrderStatus.PENDING,
            total_amount=total,
            shipping_address=payload.shipping_address,
            notes=payload.notes,
        )
        for product, quantity, unit_price in locked:
            order.items.append(
                OrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    product_sku=product.sku,
                    quantity=quantity,
                    unit_price=unit_price,
                    total_price=quantity * unit_price,
                )
            )
            product.stock_quantity -= quantity
        self._session.add(order)
        cart.items.clear()
        self._session.flush()
        self._session.refresh(order)

        self._notifications.queue_order_confirmation(order)
        logger.info(
            "orders.create.success",
            extra=log_context(
                user_id=user.id,
                order_id=order.id,
                order_number=order.order_number,
                total_amount=order.total_amount,
            ),
        )
        return OrderOut.model_validate(order)

    def list_orders(
        self, user: User, *, page: int, per_page: int, order_by: OrderBy
    ) -> OrderPage:
        result = paginate_sql(
            self._session,
            self._repo.list_stmt(user_id=user.id),
            page=page,
            per_page=per_page,
            order_by=order_by,
        )
        return result.map_into(OrderPage, OrderOut.model_validate)

    def get_order(self, user: User, order_id: UUID) -> OrderOut:
        return OrderOut.model_validate(self._require_owned(user, order_id))

    def cancel_order(self, user: User, order_id: UUID) -> OrderOut:
        order = self._require_owned(user, order_id)
        old_status = transition_order(
            self._session,
            order,
            OrderStatus.CANCELLED,
            notes="Cancelled by customer",
        )
        self._notifications.queue_order_status_update(
            order,
            old_status=old_status,
            new_status=OrderStatus.CANCELLED,
        )
        logger.info(
            "orders.cancel.success",
            extra=log_context(user_id=user.id, order_id=order.id, previous=old_status.value),
        )
        return OrderOut.model_validate(order)

    def _require_owned(self, user: User, order_id: UUID) -> Order:
        order = self._repo.get(order_id)
        if order is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Order not found.")
        if order.user_id != user.id:
            raise HTTPException(
                status.HTTP_403_FORBIDDEN,
                detail="You do not have access to this order.",
            )
        return order


__all__ = ["MINIMUM_ORDER_AMOUNT_CENTS", "OrdersService", "transition_order"]
