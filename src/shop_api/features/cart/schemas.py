from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import Field

from shop_api.common.schema import BaseSchema, ResponseSchema
from shop_api.features.products.schemas import ProductSummary


class CartItemOut(BaseSchema):
    id: UUID
    product_id: UUID
    product: ProductSummary
    quantity: int
    unit_price: int
    total_price: int


class CartOut(BaseSchema):
    id: UUID
    user_id: UUID
    items: list[CartItemOut]
    total_amount: int
    total_items: int
    is_empty: bool
    updated_at: datetime


class CartItemRequest(BaseSchema):
    product_id: UUID
    quantity: int = Field(..., ge=1, le=100)


CartIssueCode = Literal[
    "cart_empty",
    "product_unavailable",
    "out_of_stock",
    "insufficient_stock",
]


class CartIssue(ResponseSchema):
    code: CartIssueCode
    message: str
    product_id: UUID | None = None
    product_name: str | None = None
    requested: int | None = None
    available: int | None = None


class CartValidation(ResponseSchema):
    valid: bool
    issues: list[CartIssue]


__all__ = [
    "CartIssue",
    "CartIssueCode",
    "CartItemOut",
    "CartItemRequest",
    "CartOut",
    "CartValidation",
]
