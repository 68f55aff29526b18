"""Routes for shipping methods."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Response, Security, status

from shop_api.api.deps import get_shipping_service, get_shipping_service_read
from shop_api.core.http import get_optional_user, require_csrf, require_permission
from shop_db.models import User

from .schemas import (
    ShippingMethodCreate,
    ShippingMethodList,
    ShippingMethodOut,
    ShippingMethodUpdate,
)
from .service import ShippingService

router = APIRouter(prefix="/shipping/methods", tags=["shipping"])

ReadService = Annotated[ShippingService, Depends(get_shipping_service_read)]
WriteService = Annotated[ShippingService, Depends(get_shipping_service)]
AdminUser = Annotated[User, Security(require_permission("catalog.manage"))]
METHOD_ID_PARAM = Annotated[UUID, Path(description="Shipping method identifier.")]

_ADMIN_RESPONSES = {
    status.HTTP_401_UNAUTHORIZED: {"description": "Authentication required."},
    status.HTTP_403_FORBIDDEN: {"description": "Administrator permission required."},
    status.HTTP_404_NOT_FOUND: {"description": "Shipping method not found."},
}


@router.get(
    "",
    response_model=ShippingMethodList,
    status_code=status.HTTP_200_OK,
    summary="List active shipping methods",
    response_model_exclude_none=True,
)
def list_shipping_methods(
    service: ReadService,
    viewer: Annotated[User | None, Depends(get_optional_user)],
    include_inactive: Annotated[bool, Query(description="Administrators only.")] = False,
) -> ShippingMethodList:
    allowed = include_inactive and viewer is not None and viewer.is_admin
    return service.list_methods(include_inactive=allowed)


@router.get(
    "/{method_id}",
    response_model=ShippingMethodOut,
    status_code=status.HTTP_200_OK,
    summary="Retrieve a shipping method",
    response_model_exclude_none=True,
    responses={status.HTTP_404_NOT_FOUND: {"description": "Shipping method not found."}},
)
def get_shipping_method(method_id: METHOD_ID_PARAM, service: ReadService) -> ShippingMethodOut:
    return service.get_method(method_id)


@router.post(
    "",
    dependencies=[Security(require_csrf)],
    response_model=ShippingMethodOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a shipping method (administrator only)",
    response_model_exclude_none=True,
    responses=_ADMIN_RESPONSES,
)
def create_shipping_method(
    payload: ShippingMethodCreate, service: WriteService, _actor: AdminUser
) -> ShippingMethodOut:
    return service.create_method(payload)


@router.put(
    "/{method_id}",
    dependencies=[Security(require_csrf)],
    response_model=ShippingMethodOut,
    status_code=status.HTTP_200_OK,
    summary="Update a shipping method (administrator only)",
    response_model_exclude_none=True,
    responses=_ADMIN_RESPONSES,
)
def update_shipping_method(
    method_id: METHOD_ID_PARAM,
    payload: ShippingMethodUpdate,
    service: WriteService,
    _actor: AdminUser,
) -> ShippingMethodOut:
    return service.update_method(method_id, payload)


@router.delete(
    "/{method_id}",
    dependencies=[Security(require_csrf)],
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a shipping method (administrator only)",
    responses=_ADMIN_RESPONSES,
)
def delete_shipping_method(
    method_id: METHOD_ID_PARAM, service: WriteService, _actor: AdminUser
) -> Response:
    service.delete_method(method_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
