from __future__ import annotations

from shop_db.models import Order

SORT_FIELDS = {
    "id": (Order.id.asc(), Order.id.desc()),
    "created_at": (Order.created_at.asc(), Order.created_at.desc()),
    "updated_at": (Order.updated_at.asc(), Order.updated_at.desc()),
    "total_amount": (Order.total_amount.asc(), Order.total_amount.desc()),
    "order_number": (Order.order_number.asc(), Order.order_number.desc()),
    "status": (Order.status.asc(), Order.status.desc()),
}

DEFAULT_SORT = ["-created_at"]
ID_FIELD = (Order.id.asc(), Order.id.desc())

__all__ = ["DEFAULT_SORT", "ID_FIELD", "SORT_FIELDS"]
