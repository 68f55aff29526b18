"""Cart operations for the authenticated user."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from shop_api.common.errors import InsufficientStockError, OutOfStockError
from shop_api.common.logging import log_context
from shop_api.common.problem_details import field_error
from shop_api.features.products.repository import ProductsRepository
from shop_api.features.products.service import ensure_stock, is_purchasable
from shop_api.settings import Settings
from shop_db.models import Cart, CartItem, Product, User

from .repository import CartRepository
from .schemas import CartIssue, CartItemRequest, CartOut, CartValidation

logger = logging.getLogger(__name__)


class CartService:
    def __init__(self, *, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._repo = CartRepository(session)
        self._products = ProductsRepository(session)

    def get_cart(self, user: User) -> CartOut:
        return self._out(self._repo.get_or_create(user.id))

    def add_item(self, user: User, payload: CartItemRequest) -> CartOut:
        logger.debug(
            "cart.add.start",
            extra=log_context(user_id=user.id, product_id=payload.product_id),
        )
        product = self._purchasable_product(payload.product_id)
        cart = self._repo.get_or_create(user.id)
        item = self._repo.find_item(cart, product.id)
        existing = item.quantity if item is not None else 0
        ensure_stock(product, existing + payload.quantity)

        if item is None:
            cart.items.append(
                CartItem(
                    product_id=product.id,
                    quantity=payload.quantity,
                    unit_price=product.price,
                )
            )
        else:
            item.quantity = existing + payload.quantity
        self._session.flush()
        self._session.refresh(cart)
        logger.info(
            "cart.add.success",
            extra=log_context(user_id=user.id, product_id=product.id, quantity=payload.quantity),
        )
        return self._out(cart)

    def update_item(self, user: User, payload: CartItemRequest) -> CartOut:
        cart = self._repo.get_or_create(user.id)
        item = self._repo.find_item(cart, payload.product_id)
        if item is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Product is not in the cart.")
        product = self._purchasable_product(payload.product_id)
        ensure_stock(product, payload.quantity)
        item.quantity = payload.quantity
        self._session.flush()
        self._session.refresh(cart)
        logger.info(
            "cart.update.success",
            extra=log_context(user_id=user.id, product_id=product.id, quantity=payload.quantity),
        )
        return self._out(cart)

    def remove_item(self, user: User, product_id: UUID) -> CartOut:
        cart = self._repo.get_or_create(user.id)
        item = self._repo.find_item(cart, product_id)
        if item is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Product is not in the cart.")
        cart.items.remove(item)
        self._session.flush()
        self._session.refresh(cart)
        logger.info(
            "cart.remove.success",
            extra=log_context(user_id=user.id, product_id=product_id),
        )
        return self._out(cart)

    def clear(self, user: User) -> None:
        cart = self._repo.get_for_user(user.id)
        if cart is not None:
            self._repo.clear(cart)
        logger.info("cart.clear.success", extra=log_context(user_id=user.id))

    def validate(self, user: User) -> CartValidation:
        cart = self._repo.get_or_create(user.id)
        issues = collect_cart_issues(cart)
        return CartValidation(valid=not issues, issues=issues)

    def _purchasable_product(self, product_id: UUID) -> Product:
        product = self._products.get(product_id, include_deleted=True)
        if product is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Product not found.")
        if not is_purchasable(product):
            raise field_error(
                "product_id",
                f"Product '{product.name}' is not available.",
                code="product_unavailable",
            )
        return product

    @staticmethod
    def _out(cart: Cart) -> CartOut:
        return CartOut.model_validate(cart)


def collect_cart_issues(cart: Cart) -> list[CartIssue]:
    """Return every reason ``cart`` cannot be checked out right now."""

    if cart.is_empty:
        return [CartIssue(code="cart_empty", message="Cart is empty.")]

    issues: list[CartIssue] = []
    for item in cart.items:
        product = item.product
        if not is_purchasable(product):
            issues.append(
                CartIssue(
                    code="product_unavailable",
                    message="Product is no longer available.",
                    product_id=item.product_id,
                    product_name=product.name if product is not None else None,
                )
            )
            continue
        try:
            ensure_stock(product, item.quantity)
        except OutOfStockError as exc:
            issues.append(
                CartIssue(
                    code="out_of_stock",
                    message=str(exc),
                    product_id=product.id,
                    product_name=product.name,
                    requested=item.quantity,
                    available=0,
                )
            )
        except InsufficientStockError as exc:
            issues.append(
                CartIssue(
                    code="insufficient_stock",
                    message=str(exc),
                    product_id=product.id,
                    product_name=product.name,
                    requested=exc.requested,
                    available=exc.available,
                )
            )
    return issues


__all__ = ["CartService", "collect_cart_issues"]
