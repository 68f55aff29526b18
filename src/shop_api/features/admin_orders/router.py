"""Admin routes for order management."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Security, status

from shop_api.api.deps import get_admin_orders_service, get_admin_orders_service_read
from shop_api.common.pagination import PageParams, get_page_params
from shop_api.common.sorting import make_sort_dependency
from shop_api.common.types import OrderBy
from shop_api.core.http import require_authenticated, require_csrf, require_permission
from shop_api.features.orders.sorting import DEFAULT_SORT, ID_FIELD, SORT_FIELDS
from shop_db.models import OrderStatus, User

from .schemas import (
    AdminOrderOut,
    AdminOrderPage,
    OrderStatistics,
    OrderStatusLog,
    OrderStatusUpdate,
    OrderTimeline,
)
from .service import AdminOrdersService

router = APIRouter(
    prefix="/admin/orders",
    tags=["admin-orders"],
    dependencies=[Security(require_authenticated)],
)

OrderManager = Annotated[User, Security(require_permission("order.manage"))]
ReadService = Annotated[AdminOrdersService, Depends(get_admin_orders_service_read)]
ORDER_ID_PARAM = Annotated[UUID, Path(description="Order identifier.")]

order_sort = make_sort_dependency(allowed=SORT_FIELDS, default=DEFAULT_SORT, id_field=ID_FIELD)


@dataclass(frozen=True, slots=True)
class AdminOrderFilters:
    order_status: OrderStatus | None = None
    user_id: UUID | None = None
    order_number: str | None = None
    date_from: date | None = None
    date_to: date | None = None


def admin_order_filters(
    order_status: Annotated[OrderStatus | None, Query(alias="status")] = None,
    user_id: Annotated[UUID | None, Query()] = None,
    order_number: Annotated[str | None, Query(max_length=32)] = None,
    date_from: Annotated[date | None, Query(description="YYYY-MM-DD")] = None,
    date_to: Annotated[date | None, Query(description="YYYY-MM-DD")] = None,
) -> AdminOrderFilters:
    if date_from and date_to and date_to < date_from:
        raise HTTPException(
            status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail=[
                {
                    "loc": ["query", "date_to"],
                    "msg": "date_to must be on or after date_from",
                    "type": "value_error",
                }
            ],
        )
    return AdminOrderFilters(
        order_status=order_status,
        user_id=user_id,
        order_number=(order_number or "").strip() or None,
        date_from=date_from,
        date_to=date_to,
    )


@router.get(
    "",
    response_model=AdminOrderPage,
    status_code=status.HTTP_200_OK,
    summary="List all orders",
    response_model_exclude_none=True,
)
def list_orders(
    _actor: OrderManager,
    service: ReadService,
    filters: Annotated[AdminOrderFilters, Depends(admin_order_filters)],
    page: Annotated[PageParams, Depends(get_page_params)],
    order_by: Annotated[OrderBy, Depends(order_sort)],
) -> AdminOrderPage:
    return service.list_orders(
        order_status=filters.order_status,
        user_id=filters.user_id,
        order_number=filters.order_number,
        date_from=filters.date_from,
        date_to=filters.date_to,
        page=page.page,
        per_page=page.per_page,
        order_by=order_by,
    )


@router.get(
    "/statistics",
    response_model=OrderStatistics,
    status_code=status.HTTP_200_OK,
    summary="Count orders by status",
)
def order_statistics(_actor: OrderManager, service: ReadService) -> OrderStatistics:
    return service.statistics()


@router.get(
    "/{order_id}",
    response_model=AdminOrderOut,
    status_code=status.HTTP_200_OK,
    summary="Retrieve any order",
    response_model_exclude_none=True,
    responses={status.HTTP_404_NOT_FOUND: {"description": "Order not found."}},
)
def get_order(
    order_id: ORDER_ID_PARAM, _actor: OrderManager, service: ReadService
) -> AdminOrderOut:
    return service.get_order(order_id)


@router.patch(
    "/{order_id}/status",
    dependencies=[Security(require_csrf)],
    response_model=AdminOrderOut,
    status_code=status.HTTP_200_OK,
    summary="Move an order to a new status",
    response_model_exclude_none=True,
    responses={
        status.HTTP_404_NOT_FOUND: {"description": "Order not found."},
        status.HTTP_422_UNPROCESSABLE_CONTENT: {"description": "Transition not allowed."},
    },
)
def update_order_status(
    order_id: ORDER_ID_PARAM,
    payload: OrderStatusUpdate,
    actor: OrderManager,
    service: Annotated[AdminOrdersService, Depends(get_admin_orders_service)],
) -> AdminOrderOut:
    return service.update_status(order_id, payload, actor=actor)


@router.get(
    "/{order_id}/status/history",
    response_model=OrderTimeline,
    status_code=status.HTTP_200_OK,
    summary="Readable status timeline for an order",
    responses={status.HTTP_404_NOT_FOUND: {"description": "Order not found."}},
)
def order_timeline(
    order_id: ORDER_ID_PARAM, _actor: OrderManager, service: ReadService
) -> OrderTimeline:
    return service.timeline(order_id)


@router.get(
    "/{order_id}/status/log",
    response_model=OrderStatusLog,
    status_code=status.HTTP_200_OK,
    summary="Stored status history rows for an order",
    response_model_exclude_none=True,
    responses={status.HTTP_404_NOT_FOUND: {"description": "Order not found."}},
)
def order_status_log(
    order_id: ORDER_ID_PARAM, _actor: OrderManager, service: ReadService
) -> OrderStatusLog:
    return service.status_log(order_id)


__all__ = ["router"]
