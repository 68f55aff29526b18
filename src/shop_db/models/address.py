"""Shipping and billing addresses owned by users."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shop_db import GUID, Base, TimestampMixin, UUIDPrimaryKeyMixin, enum_values

from .locale import Country

if TYPE_CHECKING:
    from .user import User


class AddressType(str, enum.Enum):
    SHIPPING = "shipping"
    BILLING = "billing"


class Address(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "addresses"

    user_id: Mapped[UUID] = mapped_column(
        GUID(),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[AddressType] = mapped_column(
        SAEnum(
            AddressType,
            name="address_type",
            native_enum=False,
            length=20,
            values_callable=enum_values,
        ),
        nullable=False,
        default=AddressType.SHIPPING,
    )
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address_line_1: Mapped[str] = mapped_column(String(255), nullable=False)
    address_line_2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    state: Mapped[str] = mapped_column(String(255), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(20), nullable=False)
    country_id: Mapped[UUID] = mapped_column(
        GUID(),
        ForeignKey("countries.id", ondelete="RESTRICT"),
        nullable=False,
    )
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)

    user: Mapped[User] = relationship("User", back_populates="addresses")
    country: Mapped[Country] = relationship("Country", lazy="selectin")

    __table_args__ = (Index("ix_addresses_user_id_type", "user_id", "type"),)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


__all__ = ["Address", "AddressType"]
