from __future__ import annotations

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from shop_db.models import Address, AddressType


class AddressesRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_owned(self, *, address_id: UUID, user_id: UUID) -> Address | None:
        stmt = select(Address).where(Address.id == address_id, Address.user_id == user_id)
        return self._session.execute(stmt).scalar_one_or_none()

    def list_stmt(self, *, user_id: UUID, address_type: AddressType | None = None) -> Select:
        stmt = select(Address).where(Address.user_id == user_id)
        if address_type is not None:
            stmt = stmt.where(Address.type == address_type)
        return stmt

    def clear_default(
        self, *, user_id: UUID, address_type: AddressType, except_id: UUID | None
    ) -> None:
        stmt = (
            update(Address)
            .where(Address.user_id == user_id)
            .where(Address.type == address_type)
            .where(Address.is_default.is_(True))
        )
        if except_id is not None:
            stmt = stmt.where(Address.id != except_id)
        self._session.execute(
            stmt.values(is_default=False).execution_options(synchronize_session="fetch")
        )


__all__ = ["AddressesRepository"]
