"""Schemas for currencies, countries and languages."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from shop_api.common.pagination import Page
from shop_api.common.schema import BaseSchema
from shop_db.models import TextDirection


class CurrencyOut(BaseSchema):
    id: UUID
    code: str
    name: str
    symbol: str
    decimals: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CurrencyCreate(BaseSchema):
    code: str = Field(..., min_length=3, max_length=3)
    name: str = Field(..., min_length=1, max_length=255)
    symbol: str = Field(..., min_length=1, max_length=10)
    decimals: int = Field(2, ge=0, le=4)
    is_active: bool = True

    @field_validator("code")
    @classmethod
    def _upper_code(cls, value: str) -> str:
        return value.strip().upper()


class CurrencyUpdate(BaseSchema):
    code: str | None = Field(default=None, min_length=3, max_length=3)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    symbol: str | None = Field(default=None, min_length=1, max_length=10)
    decimals: int | None = Field(default=None, ge=0, le=4)
    is_active: bool | None = None

    @model_validator(mode="after")
    def _ensure_changes_present(self) -> CurrencyUpdate:
        if not self.model_fields_set:
            raise ValueError("Provide at least one field to update.")
        return self


class CountryOut(BaseSchema):
    id: UUID
    code: str
    name: str
    locale: str
    currency_id: UUID | None = None
    currency: CurrencyOut | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CountryCreate(BaseSchema):
    code: str = Field(..., min_length=2, max_length=2)
    name: str = Field(..., min_length=1, max_length=255)
    locale: str = Field(..., min_length=2, max_length=10)
    currency_id: UUID | None = None
    is_active: bool = True

    @field_validator("code")
    @classmethod
    def _upper_code(cls, value: str) -> str:
        return value.strip().upper()


class CountryUpdate(BaseSchema):
    code: str | None = Field(default=None, min_length=2, max_length=2)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    locale: str | None = Field(default=None, min_length=2, max_length=10)
    currency_id: UUID | None = None
    is_active: bool | None = None

    @model_validator(mode="after")
    def _ensure_changes_present(self) -> CountryUpdate:
        if not self.model_fields_set:
            raise ValueError("Provide at least one field to update.")
        return self


class LanguageOut(BaseSchema):
    id: UUID
    code: str
    name: str
    native_name: str
    locale: str
    direction: TextDirection
    is_active: bool
    created_at: datetime
    updated_at: datetime


class LanguageCreate(BaseSchema):
    code: str = Field(..., min_length=2, max_length=5)
    name: str = Field(..., min_length=1, max_length=255)
    native_name: str = Field(..., min_length=1, max_length=255)
    locale: str = Field(..., min_length=2, max_length=10)
    direction: Literal["ltr", "rtl"] = "ltr"
    is_active: bool = True


class LanguageUpdate(BaseSchema):
    code: str | None = Field(default=None, min_length=2, max_length=5)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    native_name: str | None = Field(default=None, min_length=1, max_length=255)
    locale: str | None = Field(default=None, min_length=2, max_length=10)
    direction: Literal["ltr", "rtl"] | None = None
    is_active: bool | None = None

    @model_validator(mode="after")
    def _ensure_changes_present(self) -> LanguageUpdate:
        if not self.model_fields_set:
            raise ValueError("Provide at least one field to update.")
        return self


class CurrencyPage(Page[CurrencyOut]):
    pass


class CountryPage(Page[CountryOut]):
    pass


class LanguagePage(Page[LanguageOut]):
    pass


__all__ = [
    "CountryCreate",
    "CountryOut",
    "CountryPage",
    "CountryUpdate",
    "CurrencyCreate",
    "CurrencyOut",
    "CurrencyPage",
    "CurrencyUpdate",
    "LanguageCreate",
    "LanguageOut",
    "LanguagePage",
    "LanguageUpdate",
]
