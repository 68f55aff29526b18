"""Profile reads, edits and order statistics for the current user."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from shop_api.common.logging import log_context
from shop_api.common.money import to_units
from shop_api.common.problem_details import field_error
from shop_api.core.security import (
    enforce_password_policy,
    hash_password,
    policy_from_settings,
    verify_password,
)
from shop_api.settings import Settings
from shop_db.models import Order, OrderStatus, User

from .schemas import LastOrderSummary, ProfileStats, ProfileUpdate, UserOut

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, *, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings

    def read(self, user: User) -> UserOut:
        return UserOut.model_validate(user)

    def update(self, user: User, payload: ProfileUpdate) -> UserOut:
        logger.debug(
            "profile.update.start",
            extra=log_context(user_id=user.id, fields=sorted(payload.model_fields_set)),
        )
        if payload.name is not None:
            user.name = payload.name
        if payload.email is not None:
            email = str(payload.email)
            if email.lower() != user.email_normalized:
                self._ensure_email_available(email, user=user)
                user.email = email
        if payload.new_password is not None:
            self._change_password(user, payload)

        self._session.flush()
        self._session.refresh(user)
        logger.info("profile.update.success", extra=log_context(user_id=user.id))
        return UserOut.model_validate(user)

    def stats(self, user: User) -> ProfileStats:
        count, total = self._session.execute(
            select(func.count(Order.id), func.coalesce(func.sum(Order.total_amount), 0)).where(
                Order.user_id == user.id
            )
        ).one()
        last = self._session.execute(
            select(Order)
            .where(Order.user_id == user.id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .limit(1)
        ).scalar_one_or_none()

        average = to_units(round(total / count)) if count else 0.0
        return ProfileStats(
            total_orders=count,
            total_spent=to_units(total),
            average_order_value=average,
            member_since=user.created_at,
            last_order=(
                LastOrderSummary(
                    order_number=last.order_number,
                    total=to_units(last.total_amount),
                    status=OrderStatus(last.status).value,
                    created_at=last.created_at,
                )
                if last is not None
                else None
            ),
        )

    def _ensure_email_available(self, email: str, *, user: User) -> None:
        stmt = select(User.id).where(
            User.email_normalized == email.strip().lower(),
            User.id != user.id,
        )
        if self._session.execute(stmt).first() is not None:
            raise field_error("email", "The email has already been taken.", code="email_taken")

    def _change_password(self, user: User, payload: ProfileUpdate) -> None:
        if not verify_password(payload.old_password or "", user.hashed_password):
            raise field_error(
                "old_password",
                "The old password is incorrect.",
                code="invalid_password",
            )
        new_password = payload.new_password or ""
        enforce_password_policy(
            new_password,
            policy=policy_from_settings(self._settings),
            field_path="new_password",
            confirmation=payload.new_password_confirmation or "",
            confirmation_path="new_password_confirmation",
        )
        user.hashed_password = hash_password(new_password)
        logger.info("profile.password.changed", extra=log_context(user_id=user.id))


__all__ = ["ProfileService"]
