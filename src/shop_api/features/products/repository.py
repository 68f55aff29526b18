"""Query helpers for ``Product`` rows."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from shop_api.common.search import search_clause
from shop_db.models import Category, Product

from .schemas import ProductFilters


class ProductsRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, product_id: UUID, *, include_deleted: bool = False) -> Product | None:
        stmt = select(Product).where(Product.id == product_id)
        if not include_deleted:
            stmt = stmt.where(Product.deleted_at.is_(None))
        return self._session.execute(stmt).scalar_one_or_none()

    def get_for_update(self, product_id: UUID) -> Product | None:
        stmt = (
            select(Product)
            .where(Product.id == product_id, Product.deleted_at.is_(None))
            .with_for_update()
        )
        return self._session.execute(stmt).scalar_one_or_none()

    def list_stmt(self, *, filters: ProductFilters, search: str | None = None) -> Select:
        stmt = select(Product)
        if not filters.include_deleted:
            stmt = stmt.where(Product.deleted_at.is_(None))
        if filters.category_id is not None:
            stmt = stmt.where(Product.category_id == filters.category_id)
        if filters.min_price is not None:
            stmt = stmt.where(Product.price >= filters.min_price)
        if filters.max_price is not None:
            stmt = stmt.where(Product.price <= filters.max_price)
        if filters.is_active is not None:
            stmt = stmt.where(Product.is_active.is_(filters.is_active))
        if filters.is_featured is not None:
            stmt = stmt.where(Product.is_featured.is_(filters.is_featured))
        if search:
            stmt = stmt.where(search_clause((Product.name, Product.description), search))
        return stmt

    def category_exists(self, category_id: UUID) -> bool:
        stmt = select(Category.id).where(
            Category.id == category_id,
            Category.deleted_at.is_(None),
        )
        return self._session.execute(stmt).first() is not None

    def sku_taken(self, sku: str, *, exclude_id: UUID | None = None) -> bool:
        stmt = select(Product.id).where(Product.sku == sku)
        if exclude_id is not None:
            stmt = stmt.where(Product.id != exclude_id)
        return self._session.execute(stmt).first() is not None

    def slug_taken(self, slug: str, *, exclude_id: UUID | None = None) -> bool:
        stmt = select(Product.id).where(Product.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(Product.id != exclude_id)
        return self._session.execute(stmt).first() is not None


__all__ = ["ProductsRepository"]
