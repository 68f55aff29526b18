from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from shop_api.common.pagination import Page
from shop_api.common.schema import BaseSchema


class CategoryOut(BaseSchema):
    id: UUID
    name: str
    slug: str
    description: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


class CategorySummary(BaseSchema):
    """Embedded category reference used by product payloads."""

    id: UUID
    name: str
    slug: str


class CategoryCreate(BaseSchema):
    name: str = Field(..., min_length=3, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return value.strip()


class CategoryUpdate(BaseSchema):
    name: str | None = Field(default=None, min_length=3, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    is_active: bool | None = None

    @model_validator(mode="after")
    def _ensure_changes_present(self) -> CategoryUpdate:
        if not self.model_fields_set:
            raise ValueError("Provide at least one field to update.")
        return self


class CategoryPage(Page[CategoryOut]):
    pass


__all__ = ["CategoryCreate", "CategoryOut", "CategoryPage", "CategorySummary", "CategoryUpdate"]
