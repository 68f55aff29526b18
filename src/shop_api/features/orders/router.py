"""Routes for the caller's orders."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Security, status

from shop_api.api.deps import get_orders_service, get_orders_service_read
from shop_api.common.pagination import PageParams, get_page_params
from shop_api.common.sorting import make_sort_dependency
from shop_api.common.types import OrderBy
from shop_api.core.http import require_csrf, require_permission
from shop_db.models import User

from .schemas import OrderCreate, OrderOut, OrderPage
from .service import OrdersService
from .sorting import DEFAULT_SORT, ID_FIELD, SORT_FIELDS

router = APIRouter(prefix="/orders", tags=["orders"])

OrderReader = Annotated[User, Security(require_permission("order.read"))]
ORDER_ID_PARAM = Annotated[UUID, Path(description="Order identifier.")]

order_sort = make_sort_dependency(allowed=SORT_FIELDS, default=DEFAULT_SORT, id_field=ID_FIELD)


@router.post(
    "",
    dependencies=[Security(require_csrf)],
    response_model=OrderOut,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order from the cart",
    response_model_exclude_none=True,
    responses={
        status.HTTP_422_UNPROCESSABLE_CONTENT: {
            "description": "Empty cart, below minimum amount, or stock problems.",
        },
    },
)
def create_order(
    payload: OrderCreate,
    user: Annotated[User, Security(require_permission("order.create"))],
    service: Annotated[OrdersService, Depends(get_orders_service)],
) -> OrderOut:
    return service.create_order(user, payload)


@router.get(
    "",
    response_model=OrderPage,
    status_code=status.HTTP_200_OK,
    summary="List the caller's orders, newest first",
    response_model_exclude_none=True,
)
def list_orders(
    user: OrderReader,
    service: Annotated[OrdersService, Depends(get_orders_service_read)],
    page: Annotated[PageParams, Depends(get_page_params)],
    order_by: Annotated[OrderBy, Depends(order_sort)],
) -> OrderPage:
    return service.list_orders(user, page=page.page, per_page=page.per_page, order_by=order_by)


@router.get(
    "/{order_id}",
    response_model=OrderOut,
    status_code=status.HTTP_200_OK,
    summary="Retrieve one of the caller's orders",
    response_model_exclude_none=True,
    responses={
        status.HTTP_403_FORBIDDEN: {"description": "Order belongs to another user."},
        status.HTTP_404_NOT_FOUND: {"description": "Order not found."},
    },
)
def get_order(
    order_id: ORDER_ID_PARAM,
    user: OrderReader,
    service: Annotated[OrdersService, Depends(get_orders_service_read)],
) -> OrderOut:
    return service.get_order(user, order_id)


@router.post(
    "/{order_id}/cancel",
    dependencies=[Security(require_csrf)],
    response_model=OrderOut,
    status_code=status.HTTP_200_OK,
    summary="Cancel one of the caller's orders",
    response_model_exclude_none=True,
    responses={
        status.HTTP_403_FORBIDDEN: {"description": "Order belongs to another user."},
        status.HTTP_404_NOT_FOUND: {"description": "Order not found."},
        status.HTTP_422_UNPROCESSABLE_CONTENT: {
            "description": "The order can no longer be cancelled.",
        },
    },
)
def cancel_order(
    order_id: ORDER_ID_PARAM,
    user: OrderReader,
    service: Annotated[OrdersService, Depends(get_orders_service)],
) -> OrderOut:
    return service.cancel_order(user, order_id)


__all__ = ["router"]
