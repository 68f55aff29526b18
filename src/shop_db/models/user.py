"""Customer and administrator accounts."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from shop_db import GUID, Base, TimestampMixin, UTCDateTime, UUIDPrimaryKeyMixin, enum_values

from .locale import Country, Language

if TYPE_CHECKING:
    from .address import Address
    from .authn import AuthSession
    from .user_settings import UserSettings


class UserType(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


def _normalise_email(value: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        msg = "Email must not be empty"
        raise ValueError(msg)
    return cleaned


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Single identity model for shoppers and administrators."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    email_normalized: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    user_type: Mapped[UserType] = mapped_column(
        SAEnum(
            UserType,
            name="user_type",
            native_enum=False,
            length=20,
            values_callable=enum_values,
        ),
        nullable=False,
        default=UserType.USER,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    country_id: Mapped[UUID | None] = mapped_column(
        GUID(),
        ForeignKey("countries.id", ondelete="SET NULL"),
        nullable=True,
    )
    language_id: Mapped[UUID | None] = mapped_column(
        GUID(),
        ForeignKey("languages.id", ondelete="SET NULL"),
        nullable=True,
    )
    timezone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    last_login_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    failed_login_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    locked_until: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    country: Mapped[Country | None] = relationship("Country", lazy="selectin")
    language: Mapped[Language | None] = relationship("Language", lazy="selectin")
    auth_sessions: Mapped[list[AuthSession]] = relationship(
        "AuthSession",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    addresses: Mapped[list[Address]] = relationship(
        "Address",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    settings: Mapped[UserSettings | None] = relationship(
        "UserSettings",
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )

    @validates("email")
    def _store_normalised_email(self, _key: str, value: str) -> str:
        cleaned = _normalise_email(value)
        self.email_normalized = cleaned.lower()
        return cleaned

    @validates("name")
    def _trim_name(self, _key: str, value: str) -> str:
        return value.strip()

    @property
    def is_admin(self) -> bool:
        return self.user_type == UserType.ADMIN


__all__ = ["User", "UserType"]
