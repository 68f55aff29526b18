"""Service layer for currencies, countries and languages."""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from shop_api.common.logging import log_context
from shop_api.common.pagination import paginate_sql
from shop_api.common.types import OrderBy
from shop_api.settings import Settings
from shop_db.models import Country, Currency, Language

from .repository import LocaleModel, LocalesRepository
from .schemas import (
    CountryCreate,
    CountryOut,
    CountryPage,
    CountryUpdate,
    CurrencyCreate,
    CurrencyOut,
    CurrencyPage,
    CurrencyUpdate,
    LanguageCreate,
    LanguageOut,
    LanguagePage,
    LanguageUpdate,
)

logger = logging.getLogger(__name__)

_LABELS: dict[type, str] = {Currency: "Currency", Country: "Country", Language: "Language"}


class LocalesService:
    def __init__(self, *, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._repo = LocalesRepository(session)

    # Currencies -----------------------------------------------------------

    def list_currencies(
        self,
        *,
        page: int,
        per_page: int,
        order_by: OrderBy,
        search: str | None = None,
        is_active: bool | None = None,
    ) -> CurrencyPage:
        result = paginate_sql(
            self._session,
            self._repo.list_stmt(Currency, search=search, is_active=is_active),
            page=page,
            per_page=per_page,
            order_by=order_by,
        )
        return result.map_into(CurrencyPage, CurrencyOut.model_validate)

    def get_currency(self, currency_id: UUID) -> CurrencyOut:
        return CurrencyOut.model_validate(self._require(Currency, currency_id))

    def create_currency(self, payload: CurrencyCreate) -> CurrencyOut:
        currency = self._create(Currency(**payload.model_dump()))
        return CurrencyOut.model_validate(currency)

    def update_currency(self, currency_id: UUID, payload: CurrencyUpdate) -> CurrencyOut:
        currency = self._update(Currency, currency_id, payload.model_dump(exclude_unset=True))
        return CurrencyOut.model_validate(currency)

    def delete_currency(self, currency_id: UUID) -> None:
        self._delete(Currency, currency_id)

    # Countries ------------------------------------------------------------

    def list_countries(
        self,
        *,
        page: int,
        per_page: int,
        order_by: OrderBy,
        search: str | None = None,
        is_active: bool | None = None,
        include_currency: bool = False,
    ) -> CountryPage:
        result = paginate_sql(
            self._session,
            self._repo.list_stmt(Country, search=search, is_active=is_active),
            page=page,
            per_page=per_page,
            order_by=order_by,
        )
        return result.map_into(
            CountryPage,
            lambda country: self._country_out(country, include_currency=include_currency),
        )

    def get_country(self, country_id: UUID, *, include_currency: bool = False) -> CountryOut:
        country = self._require(Country, country_id)
        return self._country_out(country, include_currency=include_currency)

    def create_country(self, payload: CountryCreate) -> CountryOut:
        self._ensure_currency(payload.currency_id)
        country = self._create(Country(**payload.model_dump()))
        return self._country_out(country, include_currency=True)

    def update_country(self, country_id: UUID, payload: CountryUpdate) -> CountryOut:
        changes = payload.model_dump(exclude_unset=True)
        self._ensure_currency(changes.get("currency_id"))
        country = self._update(Country, country_id, changes)
        return self._country_out(country, include_currency=True)

    def delete_country(self, country_id: UUID) -> None:
        self._delete(Country, country_id)

    # Languages ------------------------------------------------------------

    def list_languages(
        self,
        *,
        page: int,
        per_page: int,
        order_by: OrderBy,
        search: str | None = None,
        is_active: bool | None = None,
    ) -> LanguagePage:
        result = paginate_sql(
            self._session,
            self._repo.list_stmt(Language, search=search, is_active=is_active),
            page=page,
            per_page=per_page,
            order_by=order_by,
        )
        return result.map_into(LanguagePage, LanguageOut.model_validate)

    def get_language(self, language_id: UUID) -> LanguageOut:
        return LanguageOut.model_validate(self._require(Language, language_id))

    def create_language(self, payload: LanguageCreate) -> LanguageOut:
        language = self._create(Language(**payload.model_dump()))
        return LanguageOut.model_validate(language)

    def update_language(self, language_id: UUID, payload: LanguageUpdate) -> LanguageOut:
        language = self._update(Language, language_id, payload.model_dump(exclude_unset=True))
        return LanguageOut.model_validate(language)

    def delete_language(self, language_id: UUID) -> None:
        self._delete(Language, language_id)

    # Helpers --------------------------------------------------------------

    def _require(self, model: LocaleModel, record_id: UUID) -> Any:
        record = self._repo.get(model, record_id)
        if record is None:
            raise HTTPException(
                status.HTTP_404_NOT_FOUND,
                detail=f"{_LABELS[model]} not found.",
            )
        return record

    def _ensure_currency(self, currency_id: UUID | None) -> None:
        if currency_id is not None and self._repo.get(Currency, currency_id) is None:
            raise HTTPException(
                status.HTTP_422_UNPROCESSABLE_CONTENT,
                detail=[
                    {
                        "loc": ["body", "currency_id"],
                        "msg": "The selected currency does not exist.",
                        "type": "not_found",
                    }
                ],
            )

    def _create(self, record: Any) -> Any:
        name = type(record).__name__.lower()
        logger.debug(f"{name}.create.start", extra=log_context(code=record.code))
        created = self._repo.add(record)
        logger.info(
            f"{name}.create.success",
            extra=log_context(record_id=str(created.id), code=created.code),
        )
        return created

    def _update(self, model: LocaleModel, record_id: UUID, changes: dict[str, Any]) -> Any:
        record = self._require(model, record_id)
        for field, value in changes.items():
            setattr(record, field, value)
        self._session.flush()
        self._session.refresh(record)
        logger.info(
            f"{model.__name__.lower()}.update.success",
            extra=log_context(record_id=str(record.id), fields=sorted(changes)),
        )
        return record

    def _delete(self, model: LocaleModel, record_id: UUID) -> None:
        record = self._require(model, record_id)
        self._repo.delete(record)
        logger.info(
            f"{model.__name__.lower()}.delete.success",
            extra=log_context(record_id=str(record_id)),
        )

    @staticmethod
    def _country_out(country: Country, *, include_currency: bool) -> CountryOut:
        out = CountryOut.model_validate(country)
        if not include_currency:
            out = out.model_copy(update={"currency": None})
        return out


__all__ = ["LocalesService"]
