"""Query helpers for ``Category`` rows."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from shop_api.common.search import search_clause
from shop_db.models import Category, Product


class CategoriesRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, category_id: UUID, *, include_deleted: bool = False) -> Category | None:
        stmt = select(Category).where(Category.id == category_id)
        if not include_deleted:
            stmt = stmt.where(Category.deleted_at.is_(None))
        return self._session.execute(stmt).scalar_one_or_none()

    def list_stmt(
        self,
        *,
        search: str | None = None,
        is_active: bool | None = None,
        include_deleted: bool = False,
    ) -> Select:
        stmt = select(Category)
        if not include_deleted:
            stmt = stmt.where(Category.deleted_at.is_(None))
        if is_active is not None:
            stmt = stmt.where(Category.is_active.is_(is_active))
        if search:
            stmt = stmt.where(search_clause((Category.name, Category.description), search))
        return stmt

    def has_products(self, category_id: UUID) -> bool:
        stmt = select(exists().where(Product.category_id == category_id))
        return bool(self._session.execute(stmt).scalar())

    def name_taken(self, name: str, *, exclude_id: UUID | None = None) -> bool:
        stmt = select(Category.id).where(Category.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        return self._session.execute(stmt).first() is not None

    def slug_taken(self, slug: str, *, exclude_id: UUID | None = None) -> bool:
        stmt = select(Category.id).where(Category.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        return self._session.execute(stmt).first() is not None


__all__ = ["CategoriesRepository"]
