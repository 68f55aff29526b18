"""Idempotent reference data seeding."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from shop_api.features.app_settings.repository import ApplicationSettingsRepository
from shop_db.models import Country, Currency, Language, ShippingMethod, TextDirection

logger = logging.getLogger(__name__)

CURRENCIES = (
    {"code": "TRY", "name": "Turkish Lira", "symbol": "₺", "decimals": 2},
    {"code": "USD", "name": "US Dollar", "symbol": "$", "decimals": 2},
)

COUNTRIES = (
    {"code": "TR", "name": "Türkiye", "locale": "tr_TR", "currency": "TRY"},
    {"code": "US", "name": "United States", "locale": "en_US", "currency": "USD"},
)

LANGUAGES = (
    {"code": "tr", "name": "Turkish", "native_name": "Türkçe", "locale": "tr_TR"},
    {"code": "en", "name": "English", "native_name": "English", "locale": "en_US"},
)

SHIPPING_METHODS = (
    {
        "name": "Standard Shipping",
        "description": "Delivered by our regular courier partners.",
        "price": 2999,
        "min_delivery_days": 3,
        "max_delivery_days": 5,
        "sort_order": 1,
    },
    {
        "name": "Express Shipping",
        "description": "Priority handling and next-day dispatch.",
        "price": 5999,
        "min_delivery_days": 1,
        "max_delivery_days": 2,
        "sort_order": 2,
    },
    {
        "name": "Free Shipping",
        "description": "Economy delivery at no cost.",
        "price": 0,
        "min_delivery_days": 5,
        "max_delivery_days": 7,
        "sort_order": 3,
    },
)


@dataclass(slots=True)
class SeedReport:
    currencies: int = 0
    countries: int = 0
    languages: int = 0
    shipping_methods: int = 0
    settings: int = 0

    @property
    def total(self) -> int:
        return (
            self.currencies
            + self.countries
            + self.languages
            + self.shipping_methods
            + self.settings
        )


def seed_reference_data(session: Session) -> SeedReport:
    """Insert missing reference rows; existing rows are left untouched."""

    report = SeedReport()

    currencies = {row.code: row for row in session.execute(select(Currency)).scalars()}
    for data in CURRENCIES:
        if data["code"] in currencies:
            continue
        currency = Currency(**data)
        session.add(currency)
        currencies[currency.code] = currency
        report.currencies += 1
    session.flush()

    existing_countries = set(session.execute(select(Country.code)).scalars())
    for data in COUNTRIES:
        if data["code"] in existing_countries:
            continue
        currency = currencies.get(data["currency"])
        session.add(
            Country(
                code=data["code"],
                name=data["name"],
                locale=data["locale"],
                currency_id=currency.id if currency is not None else None,
            )
        )
        report.countries += 1

    existing_languages = set(session.execute(select(Language.code)).scalars())
    for data in LANGUAGES:
        if data["code"] in existing_languages:
            continue
        session.add(Language(direction=TextDirection.LTR, **data))
        report.languages += 1

    existing_methods = set(session.execute(select(ShippingMethod.name)).scalars())
    for data in SHIPPING_METHODS:
        if data["name"] in existing_methods:
            continue
        session.add(ShippingMethod(**data))
        report.shipping_methods += 1

    session.flush()
    report.settings = ApplicationSettingsRepository(session).ensure_defaults()

    logger.info(
        "seed.reference_data.complete",
        extra={
            "currencies": report.currencies,
            "countries": report.countries,
            "languages": report.languages,
            "shipping_methods": report.shipping_methods,
            "settings": report.settings,
        },
    )
    return report


__all__ = ["SeedReport", "seed_reference_data"]
