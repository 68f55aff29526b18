from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from shop_db.models import Cart, CartItem


class CartRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_for_user(self, user_id: UUID) -> Cart | None:
        stmt = select(Cart).where(Cart.user_id == user_id)
        return self._session.execute(stmt).scalar_one_or_none()

    def get_or_create(self, user_id: UUID) -> Cart:
        cart = self.get_for_user(user_id)
        if cart is None:
            cart = Cart(user_id=user_id)
            self._session.add(cart)
            self._session.flush()
            self._session.refresh(cart)
        return cart

    @staticmethod
    def find_item(cart: Cart, product_id: UUID) -> CartItem | None:
        for item in cart.items:
            if item.product_id == product_id:
                return item
        return None

    def clear(self, cart: Cart) -> None:
        cart.items.clear()
        self._session.flush()


__all__ = ["CartRepository"]
