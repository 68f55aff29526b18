from __future__ import annotations

from shop_db.models import Address

SORT_FIELDS = {
    "id": (Address.id.asc(), Address.id.desc()),
    "created_at": (Address.created_at.asc(), Address.created_at.desc()),
    "is_default": (Address.is_default.asc(), Address.is_default.desc()),
    "city": (Address.city.asc(), Address.city.desc()),
}

DEFAULT_SORT = ["-is_default", "-created_at"]
ID_FIELD = (Address.id.asc(), Address.id.desc())

__all__ = ["DEFAULT_SORT", "ID_FIELD", "SORT_FIELDS"]
