"""Routes for product categories."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Response, Security, status

from shop_api.api.deps import get_categories_service, get_categories_service_read
from shop_api.common.pagination import PageParams, get_page_params
from shop_api.common.search import search_query
from shop_api.common.sorting import make_sort_dependency
from shop_api.common.types import OrderBy
from shop_api.core.http import get_optional_user, require_csrf, require_permission
from shop_db.models import User

from .schemas import CategoryCreate, CategoryOut, CategoryPage, CategoryUpdate
from .service import CategoriesService
from .sorting import DEFAULT_SORT, ID_FIELD, SORT_FIELDS

router = APIRouter(prefix="/categories", tags=["categories"])

ReadService = Annotated[CategoriesService, Depends(get_categories_service_read)]
WriteService = Annotated[CategoriesService, Depends(get_categories_service)]
Viewer = Annotated[User | None, Depends(get_optional_user)]
CATEGORY_ID_PARAM = Annotated[UUID, Path(description="Category identifier.")]

_ADMIN_RESPONSES = {
    status.HTTP_401_UNAUTHORIZED: {"description": "Authentication required."},
    status.HTTP_403_FORBIDDEN: {"description": "Administrator permission required."},
    status.HTTP_404_NOT_FOUND: {"description": "Category not found."},
}

category_sort = make_sort_dependency(allowed=SORT_FIELDS, default=DEFAULT_SORT, id_field=ID_FIELD)


@router.get(
    "",
    response_model=CategoryPage,
    status_code=status.HTTP_200_OK,
    summary="List categories",
    response_model_exclude_none=True,
)
def list_categories(
    service: ReadService,
    viewer: Viewer,
    page: Annotated[PageParams, Depends(get_page_params)],
    order_by: Annotated[OrderBy, Depends(category_sort)],
    search: Annotated[str | None, Depends(search_query)],
    is_active: Annotated[bool | None, Query(description="Administrators only.")] = None,
    include_deleted: Annotated[bool, Query(description="Administrators only.")] = False,
) -> CategoryPage:
    return service.list_categories(
        viewer=viewer,
        page=page.page,
        per_page=page.per_page,
        order_by=order_by,
        search=search,
        is_active=is_active,
        include_deleted=include_deleted,
    )


@router.get(
    "/{category_id}",
    response_model=CategoryOut,
    status_code=status.HTTP_200_OK,
    summary="Retrieve a category",
    response_model_exclude_none=True,
    responses={status.HTTP_404_NOT_FOUND: {"description": "Category not found."}},
)
def get_category(
    category_id: CATEGORY_ID_PARAM,
    service: ReadService,
    viewer: Viewer,
) -> CategoryOut:
    return service.get_category(category_id, viewer=viewer)


@router.post(
    "",
    dependencies=[Security(require_csrf)],
    response_model=CategoryOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category (administrator only)",
    response_model_exclude_none=True,
    responses=_ADMIN_RESPONSES,
)
def create_category(
    payload: CategoryCreate,
    service: WriteService,
    _actor: Annotated[User, Security(require_permission("category.create"))],
) -> CategoryOut:
    return service.create_category(payload)


@router.put(
    "/{category_id}",
    dependencies=[Security(require_csrf)],
    response_model=CategoryOut,
    status_code=status.HTTP_200_OK,
    summary="Update a category (administrator only)",
    response_model_exclude_none=True,
    responses=_ADMIN_RESPONSES,
)
def update_category(
    category_id: CATEGORY_ID_PARAM,
    payload: CategoryUpdate,
    service: WriteService,
    _actor: Annotated[User, Security(require_permission("category.update"))],
) -> CategoryOut:
    return service.update_category(category_id, payload)


@router.delete(
    "/{category_id}",
    dependencies=[Security(require_csrf)],
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Soft delete a category (administrator only)",
    responses=_ADMIN_RESPONSES,
)
def delete_category(
    category_id: CATEGORY_ID_PARAM,
    service: WriteService,
    _actor: Annotated[User, Security(require_permission("category.delete"))],
) -> Response:
    service.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{category_id}/restore",
    dependencies=[Security(require_csrf)],
    response_model=CategoryOut,
    status_code=status.HTTP_200_OK,
    summary="Restore a soft-deleted category (administrator only)",
    response_model_exclude_none=True,
    responses=_ADMIN_RESPONSES,
)
def restore_category(
    category_id: CATEGORY_ID_PARAM,
    service: WriteService,
    _actor: Annotated[User, Security(require_permission("category.delete"))],
) -> CategoryOut:
    return service.restore_category(category_id)


@router.delete(
    "/{category_id}/force",
    dependencies=[Security(require_csrf)],
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Permanently delete a category (administrator only)",
    responses={
        **_ADMIN_RESPONSES,
        status.HTTP_409_CONFLICT: {"description": "Products still reference the category."},
    },
)
def force_delete_category(
    category_id: CATEGORY_ID_PARAM,
    service: WriteService,
    _actor: Annotated[User, Security(require_permission("category.delete"))],
) -> Response:
    service.force_delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
