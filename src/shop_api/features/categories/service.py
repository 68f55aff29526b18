"""Category catalog management."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from shop_api.common.logging import log_context
from shop_api.common.pagination import paginate_sql
from shop_api.common.problem_details import ApiError, field_error
from shop_api.common.time import utc_now
from shop_api.common.types import OrderBy
from shop_api.settings import Settings
from shop_db.events import slugify
from shop_db.models import Category, User

from .repository import CategoriesRepository
from .schemas import CategoryCreate, CategoryOut, CategoryPage, CategoryUpdate

logger = logging.getLogger(__name__)


def _is_admin(viewer: User | None) -> bool:
    return viewer is not None and viewer.is_admin


class CategoriesService:
    def __init__(self, *, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._repo = CategoriesRepository(session)

    def list_categories(
        self,
        *,
        viewer: User | None,
        page: int,
        per_page: int,
        order_by: OrderBy,
        search: str | None = None,
        is_active: bool | None = None,
        include_deleted: bool = False,
    ) -> CategoryPage:
        if not _is_admin(viewer):
            is_active = True
            include_deleted = False
        result = paginate_sql(
            self._session,
            self._repo.list_stmt(
                search=search,
                is_active=is_active,
                include_deleted=include_deleted,
            ),
            page=page,
            per_page=per_page,
            order_by=order_by,
        )
        return result.map_into(CategoryPage, CategoryOut.model_validate)

    def get_category(self, category_id: UUID, *, viewer: User | None) -> CategoryOut:
        category = self._require(category_id)
        if not category.is_active and not _is_admin(viewer):
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found.")
        return CategoryOut.model_validate(category)

    def create_category(self, payload: CategoryCreate) -> CategoryOut:
        logger.debug("categories.create.start", extra=log_context(name=payload.name))
        if self._repo.name_taken(payload.name):
            raise field_error("name", "The name has already been taken.", code="name_taken")
        slug = slugify(payload.slug) if payload.slug else None
        if slug and self._repo.slug_taken(slug):
            raise field_error("slug", "The slug has already been taken.", code="slug_taken")

        category = Category(
            name=payload.name,
            slug=slug,
            description=payload.description,
            is_active=payload.is_active,
        )
        self._session.add(category)
        self._session.flush()
        self._session.refresh(category)
        logger.info(
            "categories.create.success",
            extra=log_context(category_id=str(category.id), slug=category.slug),
        )
        return CategoryOut.model_validate(category)

    def update_category(self, category_id: UUID, payload: CategoryUpdate) -> CategoryOut:
        category = self._require(category_id)
        changes = payload.model_dump(exclude_unset=True)
        if "name" in changes:
            changes["name"] = changes["name"].strip()
            if self._repo.name_taken(changes["name"], exclude_id=category.id):
                raise field_error("name", "The name has already been taken.", code="name_taken")
        if "slug" in changes:
            fallback = changes.get("name", category.name)
            changes["slug"] = slugify(changes["slug"]) or slugify(fallback)
            if self._repo.slug_taken(changes["slug"], exclude_id=category.id):
                raise field_error("slug", "The slug has already been taken.", code="slug_taken")
        for field, value in changes.items():
            setattr(category, field, value)
        self._session.flush()
        self._session.refresh(category)
        logger.info(
            "categories.update.success",
            extra=log_context(category_id=str(category.id), fields=sorted(changes)),
        )
        return CategoryOut.model_validate(category)

    def delete_category(self, category_id: UUID) -> None:
        category = self._require(category_id)
        category.deleted_at = utc_now()
        self._session.flush()
        logger.info("categories.delete.success", extra=log_context(category_id=str(category_id)))

    def restore_category(self, category_id: UUID) -> CategoryOut:
        category = self._repo.get(category_id, include_deleted=True)
        if category is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found.")
        if category.deleted_at is not None:
            category.deleted_at = None
            self._session.flush()
            self._session.refresh(category)
            logger.info(
                "categories.restore.success",
                extra=log_context(category_id=str(category_id)),
            )
        return CategoryOut.model_validate(category)

    def force_delete_category(self, category_id: UUID) -> None:
        category = self._repo.get(category_id, include_deleted=True)
        if category is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found.")
        if self._repo.has_products(category.id):
            raise ApiError(
                error_type="conflict",
                status_code=status.HTTP_409_CONFLICT,
                detail="Category still has products and cannot be permanently deleted.",
            )
        self._session.delete(category)
        self._session.flush()
        logger.info(
            "categories.force_delete.success",
            extra=log_context(category_id=str(category_id)),
        )

    def _require(self, category_id: UUID) -> Category:
        category = self._repo.get(category_id)
        if category is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found.")
        return category


__all__ = ["CategoriesService"]
