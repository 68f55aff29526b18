"""Routes for the product catalog."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, Security, status

from shop_api.api.deps import get_products_service, get_products_service_read
from shop_api.common.pagination import PageParams, get_page_params
from shop_api.common.search import search_query
from shop_api.common.sorting import make_sort_dependency
from shop_api.common.types import OrderBy
from shop_api.core.http import get_optional_user, require_csrf, require_permission
from shop_db.models import User

from .schemas import ProductCreate, ProductFilters, ProductOut, ProductPage, ProductUpdate
from .service import ProductsService
from .sorting import DEFAULT_SORT, ID_FIELD, SORT_FIELDS

router = APIRouter(prefix="/products", tags=["products"])

ReadService = Annotated[ProductsService, Depends(get_products_service_read)]
WriteService = Annotated[ProductsService, Depends(get_products_service)]
Viewer = Annotated[User | None, Depends(get_optional_user)]
PRODUCT_ID_PARAM = Annotated[UUID, Path(description="Product identifier.")]

_ADMIN_RESPONSES = {
    status.HTTP_401_UNAUTHORIZED: {"description": "Authentication required."},
    status.HTTP_403_FORBIDDEN: {"description": "Administrator permission required."},
    status.HTTP_404_NOT_FOUND: {"description": "Product not found."},
}

product_sort = make_sort_dependency(allowed=SORT_FIELDS, default=DEFAULT_SORT, id_field=ID_FIELD)


def product_filters(
    category_id: Annotated[UUID | None, Query()] = None,
    min_price: Annotated[int | None, Query(ge=0, description="Minimum price in cents.")] = None,
    max_price: Annotated[int | None, Query(ge=0, description="Maximum price in cents.")] = None,
    is_active: Annotated[bool | None, Query(description="Administrators only.")] = None,
    is_featured: Annotated[bool | None, Query()] = None,
    include_deleted: Annotated[bool, Query(description="Administrators only.")] = False,
) -> ProductFilters:
    if min_price is not None and max_price is not None and max_price < min_price:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail=[
                {
                    "loc": ["query", "max_price"],
                    "msg": "max_price must be greater than or equal to min_price.",
                    "type": "price_range",
                }
            ],
        )
    return ProductFilters(
        category_id=category_id,
        min_price=min_price,
        max_price=max_price,
        is_active=is_active,
        is_featured=is_featured,
        include_deleted=include_deleted,
    )


@router.get(
    "",
    response_model=ProductPage,
    status_code=status.HTTP_200_OK,
    summary="List products",
    response_model_exclude_none=True,
)
def list_products(
    service: ReadService,
    viewer: Viewer,
    page: Annotated[PageParams, Depends(get_page_params)],
    order_by: Annotated[OrderBy, Depends(product_sort)],
    filters: Annotated[ProductFilters, Depends(product_filters)],
    search: Annotated[str | None, Depends(search_query)],
) -> ProductPage:
    return service.list_products(
        viewer=viewer,
        page=page.page,
        per_page=page.per_page,
        order_by=order_by,
        filters=filters,
        search=search,
    )


@router.get(
    "/{product_id}",
    response_model=ProductOut,
    status_code=status.HTTP_200_OK,
    summary="Retrieve a product",
    response_model_exclude_none=True,
    responses={status.HTTP_404_NOT_FOUND: {"description": "Product not found."}},
)
def get_product(product_id: PRODUCT_ID_PARAM, service: ReadService, viewer: Viewer) -> ProductOut:
    return service.get_product(product_id, viewer=viewer)


@router.post(
    "",
    dependencies=[Security(require_csrf)],
    response_model=ProductOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product (administrator only)",
    response_model_exclude_none=True,
    responses=_ADMIN_RESPONSES,
)
def create_product(
    payload: ProductCreate,
    service: WriteService,
    _actor: Annotated[User, Security(require_permission("product.create"))],
) -> ProductOut:
    return service.create_product(payload)


@router.put(
    "/{product_id}",
    dependencies=[Security(require_csrf)],
    response_model=ProductOut,
    status_code=status.HTTP_200_OK,
    summary="Update a product (administrator only)",
    response_model_exclude_none=True,
    responses=_ADMIN_RESPONSES,
)
def update_product(
    product_id: PRODUCT_ID_PARAM,
    payload: ProductUpdate,
    service: WriteService,
    _actor: Annotated[User, Security(require_permission("product.update"))],
) -> ProductOut:
    return service.update_product(product_id, payload)


@router.delete(
    "/{product_id}",
    dependencies=[Security(require_csrf)],
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Soft delete a product (administrator only)",
    responses=_ADMIN_RESPONSES,
)
def delete_product(
    product_id: PRODUCT_ID_PARAM,
    service: WriteService,
    _actor: Annotated[User, Security(require_permission("product.delete"))],
) -> Response:
    service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{product_id}/restore",
    dependencies=[Security(require_csrf)],
    response_model=ProductOut,
    status_code=status.HTTP_200_OK,
    summary="Restore a soft-deleted product (administrator only)",
    response_model_exclude_none=True,
    responses=_ADMIN_RESPONSES,
)
def restore_product(
    product_id: PRODUCT_ID_PARAM,
    service: WriteService,
    _actor: Annotated[User, Security(require_permission("product.delete"))],
) -> ProductOut:
    return service.restore_product(product_id)


__all__ = ["router", "product_filters"]
