from __future__ import annotations

from sqlalchemy import func

from shop_db.models import Category

SORT_FIELDS = {
    "id": (Category.id.asc(), Category.id.desc()),
    "name": (func.lower(Category.name).asc(), func.lower(Category.name).desc()),
    "created_at": (Category.created_at.asc(), Category.created_at.desc()),
    "updated_at": (Category.updated_at.asc(), Category.updated_at.desc()),
}

DEFAULT_SORT = ["name"]
ID_FIELD = (Category.id.asc(), Category.id.desc())

__all__ = ["DEFAULT_SORT", "ID_FIELD", "SORT_FIELDS"]
