"""Reference data: currencies, countries, and languages."""

from __future__ import annotations

import enum
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from shop_db import GUID, Base, TimestampMixin, UUIDPrimaryKeyMixin, enum_values


class CurrencyCode(str, enum.Enum):
    """Currencies the storefront knows how to price in."""

    TRY = "TRY"
    USD = "USD"


class CountryCode(str, enum.Enum):
    """Countries accepted at registration."""

    TR = "TR"
    US = "US"


class LanguageCode(str, enum.Enum):
    TR = "tr"
    EN = "en"


class TextDirection(str, enum.Enum):
    LTR = "ltr"
    RTL = "rtl"


class Currency(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "currencies"

    code: Mapped[str] = mapped_column(String(3), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    symbol: Mapped[str] = mapped_column(String(10), nullable=False)
    decimals: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    countries: Mapped[list[Country]] = relationship("Country", back_populates="currency")

    __table_args__ = (
        CheckConstraint("decimals >= 0 AND decimals <= 4", name="decimals_range"),
    )

    @validates("code")
    def _upper_code(self, _key: str, value: str) -> str:
        return value.strip().upper()


class Country(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "countries"

    code: Mapped[str] = mapped_column(String(2), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    locale: Mapped[str] = mapped_column(String(10), nullable=False)
    currency_id: Mapped[UUID | None] = mapped_column(
        GUID(),
        ForeignKey("currencies.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    currency: Mapped[Currency | None] = relationship(
        "Currency",
        back_populates="countries",
        lazy="selectin",
    )

    @validates("code")
    def _upper_code(self, _key: str, value: str) -> str:
        return value.strip().upper()


class Language(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "languages"

    code: Mapped[str] = mapped_column(String(5), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    native_name: Mapped[str] = mapped_column(String(255), nullable=False)
    locale: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    direction: Mapped[TextDirection] = mapped_column(
        SAEnum(
            TextDirection,
            name="text_direction",
            native_enum=False,
            length=3,
            values_callable=enum_values,
        ),
        nullable=False,
        default=TextDirection.LTR,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    @validates("code")
    def _lower_code(self, _key: str, value: str) -> str:
        return value.strip().lower()


__all__ = [
    "Country",
    "CountryCode",
    "Currency",
    "CurrencyCode",
    "Language",
    "LanguageCode",
    "TextDirection",
]
