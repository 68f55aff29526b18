"""Address book operations scoped to the owning user."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from shop_api.common.logging import log_context
from shop_api.common.pagination import paginate_sql
from shop_api.common.problem_details import field_error
from shop_api.common.types import OrderBy
from shop_api.settings import Settings
from shop_db.models import Address, AddressType, Country, User

from .repository import AddressesRepository
from .schemas import AddressCreate, AddressOut, AddressPage, AddressUpdate

logger = logging.getLogger(__name__)


class AddressesService:
    def __init__(self, *, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._repo = AddressesRepository(session)

    def list_addresses(
        self,
        user: User,
        *,
        page: int,
        per_page: int,
        order_by: OrderBy,
        address_type: AddressType | None = None,
    ) -> AddressPage:
        result = paginate_sql(
            self._session,
            self._repo.list_stmt(user_id=user.id, address_type=address_type),
            page=page,
            per_page=per_page,
            order_by=order_by,
        )
        return result.map_into(AddressPage, AddressOut.model_validate)

    def get_address(self, user: User, address_id: UUID) -> AddressOut:
        return AddressOut.model_validate(self._require(user, address_id))

    def create_address(self, user: User, payload: AddressCreate) -> AddressOut:
        self._ensure_country(payload.country_id)
        address = Address(user_id=user.id, **payload.model_dump())
        self._session.add(address)
        self._session.flush()
        if address.is_default:
            self._repo.clear_default(
                user_id=user.id,
                address_type=AddressType(address.type),
                except_id=address.id,
            )
        self._session.refresh(address)
        logger.info(
            "addresses.create.success",
            extra=log_context(user_id=user.id, address_id=str(address.id)),
        )
        return AddressOut.model_validate(address)

    def update_address(self, user: User, address_id: UUID, payload: AddressUpdate) -> AddressOut:
        address = self._require(user, address_id)
        changes = payload.model_dump(exclude_unset=True)
        if "country_id" in changes:
            self._ensure_country(changes["country_id"])
        for field, value in changes.items():
            setattr(address, field, value)
        self._session.flush()
        if address.is_default:
            self._repo.clear_default(
                user_id=user.id,
                address_type=AddressType(address.type),
                except_id=address.id,
            )
        self._session.refresh(address)
        logger.info(
            "addresses.update.success",
            extra=log_context(user_id=user.id, address_id=str(address.id), fields=sorted(changes)),
        )
        return AddressOut.model_validate(address)

    def delete_address(self, user: User, address_id: UUID) -> None:
        address = self._require(user, address_id)
        self._session.delete(address)
        self._session.flush()
        logger.info(
            "addresses.delete.success",
            extra=log_context(user_id=user.id, address_id=str(address_id)),
        )

    def _require(self, user: User, address_id: UUID) -> Address:
        address = self._repo.get_owned(address_id=address_id, user_id=user.id)
        if address is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Address not found.")
        return address

    def _ensure_country(self, country_id: UUID) -> None:
        if self._session.get(Country, country_id) is None:
            raise field_error(
                "country_id",
                "The selected country does not exist.",
                code="country_not_found",
            )


__all__ = ["AddressesService"]
