"""Routes for the caller's shopping cart."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Response, Security, status

from shop_api.api.deps import get_cart_service
from shop_api.core.http import require_csrf, require_permission
from shop_db.models import User

from .schemas import CartItemRequest, CartOut, CartValidation
from .service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])

Service = Annotated[CartService, Depends(get_cart_service)]
CartReader = Annotated[User, Security(require_permission("cart.read"))]
CartWriter = Annotated[User, Security(require_permission("cart.update"))]

_STOCK_RESPONSES = {
    status.HTTP_404_NOT_FOUND: {"description": "Product not found or not in the cart."},
    status.HTTP_422_UNPROCESSABLE_CONTENT: {
        "description": "Product unavailable, out of stock, or insufficient stock.",
    },
}


@router.get(
    "",
    response_model=CartOut,
    status_code=status.HTTP_200_OK,
    summary="Return the caller's cart",
    response_model_exclude_none=True,
)
def read_cart(user: CartReader, service: Service) -> CartOut:
    return service.get_cart(user)


@router.post(
    "/add",
    dependencies=[Security(require_csrf)],
    response_model=CartOut,
    status_code=status.HTTP_200_OK,
    summary="Add a product to the cart",
    response_model_exclude_none=True,
    responses=_STOCK_RESPONSES,
)
def add_to_cart(payload: CartItemRequest, user: CartWriter, service: Service) -> CartOut:
    return service.add_item(user, payload)


@router.put(
    "/update",
    dependencies=[Security(require_csrf)],
    response_model=CartOut,
    status_code=status.HTTP_200_OK,
    summary="Set the quantity of a cart line",
    response_model_exclude_none=True,
    responses=_STOCK_RESPONSES,
)
def update_cart_item(payload: CartItemRequest, user: CartWriter, service: Service) -> CartOut:
    return service.update_item(user, payload)


@router.delete(
    "/items/{product_id}",
    dependencies=[Security(require_csrf)],
    response_model=CartOut,
    status_code=status.HTTP_200_OK,
    summary="Remove a product from the cart",
    response_model_exclude_none=True,
    responses={status.HTTP_404_NOT_FOUND: {"description": "Product is not in the cart."}},
)
def remove_cart_item(
    product_id: Annotated[UUID, Path(description="Product identifier.")],
    user: CartWriter,
    service: Service,
) -> CartOut:
    return service.remove_item(user, product_id)


@router.delete(
    "",
    dependencies=[Security(require_csrf)],
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove every line from the cart",
)
def clear_cart(user: CartWriter, service: Service) -> Response:
    service.clear(user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/validate",
    response_model=CartValidation,
    status_code=status.HTTP_200_OK,
    summary="Check whether the cart can be checked out",
)
def validate_cart(user: CartReader, service: Service) -> CartValidation:
    return service.validate(user)


__all__ = ["router"]
