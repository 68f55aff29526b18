"""Query helpers for reference data tables."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeAlias
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from shop_api.common.search import search_clause
from shop_db.models import Country, Currency, Language

LocaleModel: TypeAlias = type[Currency] | type[Country] | type[Language]

_SEARCH_COLUMNS: dict[type, Sequence[Any]] = {
    Currency: (Currency.code, Currency.name),
    Country: (Country.code, Country.name),
    Language: (Language.code, Language.name, Language.native_name),
}


class LocalesRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, model: LocaleModel, record_id: UUID) -> Any:
        return self._session.get(model, record_id)

    def get_country_by_code(self, code: str) -> Country | None:
        stmt = select(Country).where(Country.code == code.strip().upper())
        return self._session.execute(stmt).scalar_one_or_none()

    def get_language_for_locale(self, locale: str) -> Language | None:
        stmt = (
            select(Language)
            .where(Language.locale == locale, Language.is_active.is_(True))
            .order_by(Language.code)
            .limit(1)
        )
        return self._session.execute(stmt).scalar_one_or_none()

    def list_stmt(
        self,
        model: LocaleModel,
        *,
        search: str | None = None,
        is_active: bool | None = None,
    ) -> Select:
        stmt = select(model)
        if is_active is not None:
            stmt = stmt.where(model.is_active.is_(is_active))
        if search:
            stmt = stmt.where(search_clause(_SEARCH_COLUMNS[model], search))
        return stmt

    def add(self, record: Any) -> Any:
        self._session.add(record)
        self._session.flush()
        self._session.refresh(record)
        return record

    def delete(self, record: Any) -> None:
        self._session.delete(record)
        self._session.flush()


__all__ = ["LocaleModel", "LocalesRepository"]
