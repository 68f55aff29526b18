"""Catalog models: categories, products, and shipping methods."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shop_db import GUID, Base, SoftDeleteMixin, TimestampMixin, UUIDPrimaryKeyMixin


class Category(UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    products: Mapped[list[Product]] = relationship("Product", back_populates="category")


class Product(UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Sellable item; ``price`` is stored in minor currency units (cents)."""

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)
    sku: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    image_path: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    category_id: Mapped[UUID] = mapped_column(
        GUID(),
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
    )

    category: Mapped[Category] = relationship(
        "Category",
        back_populates="products",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("price >= 1", name="price_positive"),
        CheckConstraint("stock_quantity >= 0", name="stock_non_negative"),
        Index("ix_products_category_id", "category_id"),
        Index("ix_products_price", "price"),
    )

    @property
    def in_stock(self) -> bool:
        return self.stock_quantity > 0


class ShippingMethod(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "shipping_methods"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    min_delivery_days: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    max_delivery_days: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("price >= 0", name="price_non_negative"),
        CheckConstraint("max_delivery_days >= min_delivery_days", name="delivery_window"),
    )

    @property
    def delivery_time(self) -> str:
        if self.min_delivery_days == self.max_delivery_days:
            days = self.min_delivery_days
            suffix = "day" if days == 1 else "days"
            return f"{days} business {suffix}"
        return f"{self.min_delivery_days}-{self.max_delivery_days} business days"


__all__ = ["Category", "Product", "ShippingMethod"]
