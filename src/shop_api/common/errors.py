"""Domain failures raised by services and rendered as problem details."""

from __future__ import annotations

from fastapi import status

from shop_db.models import OrderStatus


class DomainError(Exception):
    """Base class for business-rule violations."""

    code: str = "domain_error"
    status_code: int = status.HTTP_422_UNPROCESSABLE_CONTENT
    path: str | None = None


class EmptyCartError(DomainError):
    code = "cart_empty"
    path = "cart"

    def __init__(self) -> None:
        super().__init__("Cart is empty.")


class MinimumOrderAmountError(DomainError):
    code = "minimum_order_amount"
    path = "cart"

    def __init__(self, *, total: int, minimum: int) -> None:
        self.total = total
        self.minimum = minimum
        super().__init__(
            f"Order total {total / 100:.2f} is below the minimum of {minimum / 100:.2f}."
        )


class OutOfStockError(DomainError):
    code = "out_of_stock"
    path = "product_id"

    def __init__(self, product_name: str) -> None:
        self.product_name = product_name
        super().__init__(f"Product '{product_name}' is out of stock.")


class InsufficientStockError(DomainError):
    code = "insufficient_stock"
    path = "quantity"

    def __init__(self, product_name: str, *, requested: int, available: int) -> None:
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for '{product_name}': requested {requested}, "
            f"available {available}."
        )


class InvalidStatusTransitionError(DomainError):
    code = "invalid_status_transition"
    path = "status"

    def __init__(self, current: OrderStatus, target: OrderStatus) -> None:
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot change order status from '{current.value}' to '{target.value}'."
        )


__all__ = [
    "DomainError",
    "EmptyCartError",
    "InsufficientStockError",
    "InvalidStatusTransitionError",
    "MinimumOrderAmountError",
    "OutOfStockError",
]
