"""Routes for the caller's address book."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Response, Security, status

from shop_api.api.deps import get_addresses_service, get_addresses_service_read
from shop_api.common.pagination import PageParams, get_page_params
from shop_api.common.sorting import make_sort_dependency
from shop_api.common.types import OrderBy
from shop_api.core.http import require_authenticated, require_csrf
from shop_db.models import AddressType, User

from .schemas import AddressCreate, AddressOut, AddressPage, AddressUpdate
from .service import AddressesService
from .sorting import DEFAULT_SORT, ID_FIELD, SORT_FIELDS

router = APIRouter(
    prefix="/addresses",
    tags=["addresses"],
    dependencies=[Security(require_authenticated)],
)

CurrentUser = Annotated[User, Security(require_authenticated)]
ADDRESS_ID_PARAM = Annotated[UUID, Path(description="Address identifier.")]
_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"description": "Address not found."}}

address_sort = make_sort_dependency(allowed=SORT_FIELDS, default=DEFAULT_SORT, id_field=ID_FIELD)


@router.get(
    "",
    response_model=AddressPage,
    status_code=status.HTTP_200_OK,
    summary="List the caller's addresses",
    response_model_exclude_none=True,
)
def list_addresses(
    user: CurrentUser,
    service: Annotated[AddressesService, Depends(get_addresses_service_read)],
    page: Annotated[PageParams, Depends(get_page_params)],
    order_by: Annotated[OrderBy, Depends(address_sort)],
    address_type: Annotated[AddressType | None, Query(alias="type")] = None,
) -> AddressPage:
    return service.list_addresses(
        user,
        page=page.page,
        per_page=page.per_page,
        order_by=order_by,
        address_type=address_type,
    )


@router.get(
    "/{address_id}",
    response_model=AddressOut,
    status_code=status.HTTP_200_OK,
    summary="Retrieve one of the caller's addresses",
    response_model_exclude_none=True,
    responses=_NOT_FOUND,
)
def get_address(
    address_id: ADDRESS_ID_PARAM,
    user: CurrentUser,
    service: Annotated[AddressesService, Depends(get_addresses_service_read)],
) -> AddressOut:
    return service.get_address(user, address_id)


@router.post(
    "",
    dependencies=[Security(require_csrf)],
    response_model=AddressOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create an address",
    response_model_exclude_none=True,
)
def create_address(
    payload: AddressCreate,
    user: CurrentUser,
    service: Annotated[AddressesService, Depends(get_addresses_service)],
) -> AddressOut:
    return service.create_address(user, payload)


@router.put(
    "/{address_id}",
    dependencies=[Security(require_csrf)],
    response_model=AddressOut,
    status_code=status.HTTP_200_OK,
    summary="Update an address",
    response_model_exclude_none=True,
    responses=_NOT_FOUND,
)
def update_address(
    address_id: ADDRESS_ID_PARAM,
    payload: AddressUpdate,
    user: CurrentUser,
    service: Annotated[AddressesService, Depends(get_addresses_service)],
) -> AddressOut:
    return service.update_address(user, address_id, payload)


@router.delete(
    "/{address_id}",
    dependencies=[Security(require_csrf)],
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an address",
    responses=_NOT_FOUND,
)
def delete_address(
    address_id: ADDRESS_ID_PARAM,
    user: CurrentUser,
    service: Annotated[AddressesService, Depends(get_addresses_service)],
) -> Response:
    service.delete_address(user, address_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
