"""Per-user notification preferences."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shop_db import GUID, Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from .user import User

DEFAULT_NOTIFICATION_PREFERENCES: dict[str, bool] = {
    "email_notifications": True,
    "push_notifications": True,
    "sms_notifications": False,
    "marketing_notifications": False,
    "order_update_notifications": True,
    "newsletter_notifications": False,
}


class UserSettings(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "user_settings"

    user_id: Mapped[UUID] = mapped_column(
        GUID(),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    email_notifications: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    push_notifications: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sms_notifications: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    marketing_notifications: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    order_update_notifications: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    newsletter_notifications: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )

    user: Mapped[User] = relationship("User", back_populates="settings")

    def reset_to_defaults(self) -> None:
        for key, value in DEFAULT_NOTIFICATION_PREFERENCES.items():
            setattr(self, key, value)


__all__ = ["DEFAULT_NOTIFICATION_PREFERENCES", "UserSettings"]
