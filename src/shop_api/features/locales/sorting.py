from __future__ import annotations

from sqlalchemy import func

from shop_db.models import Country, Currency, Language

CURRENCY_SORT_FIELDS = {
    "id": (Currency.id.asc(), Currency.id.desc()),
    "code": (Currency.code.asc(), Currency.code.desc()),
    "name": (func.lower(Currency.name).asc(), func.lower(Currency.name).desc()),
    "created_at": (Currency.created_at.asc(), Currency.created_at.desc()),
}
CURRENCY_ID_FIELD = (Currency.id.asc(), Currency.id.desc())

COUNTRY_SORT_FIELDS = {
    "id": (Country.id.asc(), Country.id.desc()),
    "code": (Country.code.asc(), Country.code.desc()),
    "name": (func.lower(Country.name).asc(), func.lower(Country.name).desc()),
    "created_at": (Country.created_at.asc(), Country.created_at.desc()),
}
COUNTRY_ID_FIELD = (Country.id.asc(), Country.id.desc())

LANGUAGE_SORT_FIELDS = {
    "id": (Language.id.asc(), Language.id.desc()),
    "code": (Language.code.asc(), Language.code.desc()),
    "name": (func.lower(Language.name).asc(), func.lower(Language.name).desc()),
    "created_at": (Language.created_at.asc(), Language.created_at.desc()),
}
LANGUAGE_ID_FIELD = (Language.id.asc(), Language.id.desc())

DEFAULT_SORT = ["name"]

__all__ = [
    "COUNTRY_ID_FIELD",
    "COUNTRY_SORT_FIELDS",
    "CURRENCY_ID_FIELD",
    "CURRENCY_SORT_FIELDS",
    "DEFAULT_SORT",
    "LANGUAGE_ID_FIELD",
    "LANGUAGE_SORT_FIELDS",
]
