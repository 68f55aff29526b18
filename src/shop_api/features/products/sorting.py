from __future__ import annotations

from sqlalchemy import func

from shop_db.models import Product

SORT_FIELDS = {
    "id": (Product.id.asc(), Product.id.desc()),
    "name": (func.lower(Product.name).asc(), func.lower(Product.name).desc()),
    "price": (Product.price.asc(), Product.price.desc()),
    "created_at": (Product.created_at.asc(), Product.created_at.desc()),
    "stock_quantity": (Product.stock_quantity.asc(), Product.stock_quantity.desc()),
}

DEFAULT_SORT = ["-created_at"]
ID_FIELD = (Product.id.asc(), Product.id.desc())

__all__ = ["DEFAULT_SORT", "ID_FIELD", "SORT_FIELDS"]
