"""Shipping method catalog."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from shop_api.common.logging import log_context
from shop_api.common.problem_details import field_error
from shop_api.settings import Settings
from shop_db.models import ShippingMethod

from .schemas import (
    ShippingMethodCreate,
    ShippingMethodList,
    ShippingMethodOut,
    ShippingMethodUpdate,
)

logger = logging.getLogger(__name__)


class ShippingService:
    def __init__(self, *, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings

    def list_methods(self, *, include_inactive: bool = False) -> ShippingMethodList:
        stmt = select(ShippingMethod).order_by(
            ShippingMethod.sort_order.asc(),
            ShippingMethod.name.asc(),
        )
        if not include_inactive:
            stmt = stmt.where(ShippingMethod.is_active.is_(True))
        methods = self._session.execute(stmt).scalars().all()
        return ShippingMethodList(items=[ShippingMethodOut.model_validate(m) for m in methods])

    def get_method(self, method_id: UUID) -> ShippingMethodOut:
        return ShippingMethodOut.model_validate(self._require(method_id))

    def create_method(self, payload: ShippingMethodCreate) -> ShippingMethodOut:
        method = ShippingMethod(**payload.model_dump())
        self._session.add(method)
        self._session.flush()
        self._session.refresh(method)
        logger.info(
            "shipping.create.success",
            extra=log_context(shipping_method_id=str(method.id)),
        )
        return ShippingMethodOut.model_validate(method)

    def update_method(self, method_id: UUID, payload: ShippingMethodUpdate) -> ShippingMethodOut:
        method = self._require(method_id)
        changes = payload.model_dump(exclude_unset=True)
        minimum = changes.get("min_delivery_days", method.min_delivery_days)
        maximum = changes.get("max_delivery_days", method.max_delivery_days)
        if maximum < minimum:
            raise field_error(
                "max_delivery_days",
                "max_delivery_days must be greater than or equal to min_delivery_days.",
                code="delivery_window",
            )
        for field, value in changes.items():
            setattr(method, field, value)
        self._session.flush()
        self._session.refresh(method)
        logger.info(
            "shipping.update.success",
            extra=log_context(shipping_method_id=str(method.id), fields=sorted(changes)),
        )
        return ShippingMethodOut.model_validate(method)

    def delete_method(self, method_id: UUID) -> None:
        method = self._require(method_id)
        self._session.delete(method)
        self._session.flush()
        logger.info(
            "shipping.delete.success",
            extra=log_context(shipping_method_id=str(method_id)),
        )

    def _require(self, method_id: UUID) -> ShippingMethod:
        method = self._session.get(ShippingMethod, method_id)
        if method is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Shipping method not found.")
        return method


__all__ = ["ShippingService"]
