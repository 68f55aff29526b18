"""Notification preferences and account-level settings for the current user."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from shop_api.common.logging import log_context
from shop_api.common.problem_details import field_error
from shop_api.core.security import (
    enforce_password_policy,
    hash_password,
    policy_from_settings,
    verify_password,
)
from shop_api.features.auth.service import AuthService
from shop_api.settings import Settings
from shop_db.models import Language, User, UserSettings

from .schemas import (
    LocalePreferencesOut,
    LocalePreferencesUpdate,
    NotificationPreferencesUpdate,
    PasswordChangeRequest,
    UserSettingsOut,
)

logger = logging.getLogger(__name__)


class UserSettingsService:
    def __init__(self, *, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings

    def get_or_create(self, user: User) -> UserSettings:
        stmt = select(UserSettings).where(UserSettings.user_id == user.id)
        record = self._session.execute(stmt).scalar_one_or_none()
        if record is None:
            record = UserSettings(user_id=user.id)
            record.reset_to_defaults()
            self._session.add(record)
            self._session.flush()
            self._session.refresh(record)
            logger.info("user_settings.create.success", extra=log_context(user_id=user.id))
        return record

    def read(self, user: User) -> UserSettingsOut:
        return UserSettingsOut.model_validate(self.get_or_create(user))

    def reset_defaults(self, user: User) -> UserSettingsOut:
        record = self.get_or_create(user)
        record.reset_to_defaults()
        self._session.flush()
        logger.info("user_settings.reset.success", extra=log_context(user_id=user.id))
        return UserSettingsOut.model_validate(record)

    def update_notifications(
        self, user: User, payload: NotificationPreferencesUpdate
    ) -> UserSettingsOut:
        record = self.get_or_create(user)
        changes = payload.column_changes()
        for column, value in changes.items():
            setattr(record, column, value)
        self._session.flush()
        logger.info(
            "user_settings.notifications.success",
            extra=log_context(user_id=user.id, fields=sorted(changes)),
        )
        return UserSettingsOut.model_validate(record)

    def update_preferences(
        self, user: User, payload: LocalePreferencesUpdate
    ) -> LocalePreferencesOut:
        if payload.language_id is not None:
            if self._session.get(Language, payload.language_id) is None:
                raise field_error(
                    "language_id",
                    "The selected language does not exist.",
                    code="language_not_found",
                )
            user.language_id = payload.language_id
        if payload.timezone is not None:
            user.timezone = payload.timezone
        self._session.flush()
        logger.info("user_settings.preferences.success", extra=log_context(user_id=user.id))
        return LocalePreferencesOut(language_id=user.language_id, timezone=user.timezone)

    def change_password(
        self,
        user: User,
        payload: PasswordChangeRequest,
        *,
        current_token_hash: str | None,
    ) -> None:
        if not verify_password(payload.current_password.get_secret_value(), user.hashed_password):
            raise field_error(
                "current_password",
                "The current password is incorrect.",
                code="invalid_password",
            )
        new_password = payload.new_password.get_secret_value()
        enforce_password_policy(
            new_password,
            policy=policy_from_settings(self._settings),
            field_path="new_password",
            confirmation=payload.new_password_confirmation.get_secret_value(),
            confirmation_path="new_password_confirmation",
        )
        user.hashed_password = hash_password(new_password)
        AuthService(session=self._session, settings=self._settings).revoke_other_sessions(
            user_id=user.id,
            keep_token_hash=current_token_hash,
        )
        self._session.flush()
        logger.info("user_settings.password.success", extra=log_context(user_id=user.id))


__all__ = ["UserSettingsService"]
