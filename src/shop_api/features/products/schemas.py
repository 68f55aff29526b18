"""Schemas for product payloads."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from shop_api.common.pagination import Page
from shop_api.common.schema import BaseSchema
from shop_api.features.categories.schemas import CategorySummary


class ProductOut(BaseSchema):
    id: UUID
    name: str
    slug: str
    description: str | None = None
    sku: str
    price: int = Field(description="Price in minor currency units (cents).")
    stock_quantity: int
    in_stock: bool
    image_path: str | None = None
    is_active: bool
    is_featured: bool
    category_id: UUID
    category: CategorySummary | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


class ProductSummary(BaseSchema):
    """Compact product reference embedded in cart lines."""

    id: UUID
    name: str
    slug: str
    sku: str
    price: int
    stock_quantity: int
    in_stock: bool
    image_path: str | None = None
    is_active: bool


class ProductCreate(BaseSchema):
    name: str = Field(..., min_length=3, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    sku: str = Field(..., min_length=1, max_length=50)
    price: int = Field(..., ge=1)
    stock_quantity: int = Field(0, ge=0)
    image_path: str | None = Field(default=None, max_length=500)
    is_active: bool = True
    is_featured: bool = False
    category_id: UUID

    @field_validator("name", "sku")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()


class ProductUpdate(BaseSchema):
    name: str | None = Field(default=None, min_length=3, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    sku: str | None = Field(default=None, min_length=1, max_length=50)
    price: int | None = Field(default=None, ge=1)
    stock_quantity: int | None = Field(default=None, ge=0)
    image_path: str | None = Field(default=None, max_length=500)
    is_active: bool | None = None
    is_featured: bool | None = None
    category_id: UUID | None = None

    @model_validator(mode="after")
    def _ensure_changes_present(self) -> ProductUpdate:
        if not self.model_fields_set:
            raise ValueError("Provide at least one field to update.")
        return self


class ProductFilters(BaseSchema):
    category_id: UUID | None = None
    min_price: int | None = Field(default=None, ge=0)
    max_price: int | None = Field(default=None, ge=0)
    is_active: bool | None = None
    is_featured: bool | None = None
    include_deleted: bool = False


class ProductPage(Page[ProductOut]):
    pass


__all__ = [
    "ProductCreate",
    "ProductFilters",
    "ProductOut",
    "ProductPage",
    "ProductSummary",
    "ProductUpdate",
]
