"""Product catalog management and stock checks."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from shop_api.common.errors import InsufficientStockError, OutOfStockError
from shop_api.common.logging import log_context
from shop_api.common.pagination import paginate_sql
from shop_api.common.problem_details import field_error
from shop_api.common.time import utc_now
from shop_api.common.types import OrderBy
from shop_api.settings import Settings
from shop_db.events import slugify
from shop_db.models import Product, User

from .repository import ProductsRepository
from .schemas import ProductCreate, ProductFilters, ProductOut, ProductPage, ProductUpdate

logger = logging.getLogger(__name__)


def ensure_stock(product: Product, requested: int) -> None:
    """Raise when ``product`` cannot cover ``requested`` units."""

    if product.stock_quantity <= 0:
        raise OutOfStockError(product.name)
    if product.stock_quantity < requested:
        raise InsufficientStockError(
            product.name,
            requested=requested,
            available=product.stock_quantity,
        )


def is_purchasable(product: Product | None) -> bool:
    return product is not None and product.is_active and product.deleted_at is None


class ProductsService:
    def __init__(self, *, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._repo = ProductsRepository(session)

    def list_products(
        self,
        *,
        viewer: User | None,
        page: int,
        per_page: int,
        order_by: OrderBy,
        filters: ProductFilters,
        search: str | None = None,
    ) -> ProductPage:
        if viewer is None or not viewer.is_admin:
            filters = filters.model_copy(update={"is_active": True, "include_deleted": False})
        result = paginate_sql(
            self._session,
            self._repo.list_stmt(filters=filters, search=search),
            page=page,
            per_page=per_page,
            order_by=order_by,
        )
        return result.map_into(ProductPage, ProductOut.model_validate)

    def get_product(self, product_id: UUID, *, viewer: User | None) -> ProductOut:
        product = self._require(product_id)
        if not product.is_active and (viewer is None or not viewer.is_admin):
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Product not found.")
        return ProductOut.model_validate(product)

    def create_product(self, payload: ProductCreate) -> ProductOut:
        logger.debug("products.create.start", extra=log_context(sku=payload.sku))
        self._ensure_category(payload.category_id)
        if self._repo.sku_taken(payload.sku):
            raise field_error("sku", "The sku has already been taken.", code="sku_taken")
        values = payload.model_dump()
        values["slug"] = slugify(payload.slug) if payload.slug else None
        if values["slug"] and self._repo.slug_taken(values["slug"]):
            raise field_error("slug", "The slug has already been taken.", code="slug_taken")

        product = Product(**values)
        self._session.add(product)
        self._session.flush()
        self._session.refresh(product)
        logger.info(
            "products.create.success",
            extra=log_context(product_id=product.id, sku=product.sku),
        )
        return ProductOut.model_validate(product)

    def update_product(self, product_id: UUID, payload: ProductUpdate) -> ProductOut:
        product = self._require(product_id)
        changes = payload.model_dump(exclude_unset=True)
        if "category_id" in changes:
            self._ensure_category(changes["category_id"])
        if "sku" in changes:
            changes["sku"] = changes["sku"].strip()
            if self._repo.sku_taken(changes["sku"], exclude_id=product.id):
                raise field_error("sku", "The sku has already been taken.", code="sku_taken")
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        if "slug" in changes:
            fallback = changes.get("name", product.name)
            changes["slug"] = slugify(changes["slug"]) or slugify(fallback)
            if self._repo.slug_taken(changes["slug"], exclude_id=product.id):
                raise field_error("slug", "The slug has already been taken.", code="slug_taken")
        for field, value in changes.items():
            setattr(product, field, value)
        self._session.flush()
        self._session.refresh(product)
        logger.info(
            "products.update.success",
            extra=log_context(product_id=product.id, fields=sorted(changes)),
        )
        return ProductOut.model_validate(product)

    def delete_product(self, product_id: UUID) -> None:
        product = self._require(product_id)
        product.deleted_at = utc_now()
        self._session.flush()
        logger.info("products.delete.success", extra=log_context(product_id=product_id))

    def restore_product(self, product_id: UUID) -> ProductOut:
        product = self._repo.get(product_id, include_deleted=True)
        if product is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Product not found.")
        if product.deleted_at is not None:
            product.deleted_at = None
            self._session.flush()
            self._session.refresh(product)
            logger.info("products.restore.success", extra=log_context(product_id=product_id))
        return ProductOut.model_validate(product)

    def _require(self, product_id: UUID) -> Product:
        product = self._repo.get(product_id)
        if product is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Product not found.")
        return product

    def _ensure_category(self, category_id: UUID) -> None:
        if not self._repo.category_exists(category_id):
            raise field_error(
                "category_id",
                "The selected category does not exist.",
                code="category_not_found",
            )


__all__ = ["ProductsService", "ensure_stock", "is_purchasable"]
