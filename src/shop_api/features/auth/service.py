"""Account registration, credential checks and token lifecycle."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from shop_api.common.logging import log_context
from shop_api.common.problem_details import ApiError, field_error
from shop_api.common.time import utc_now
from shop_api.core.security import (
    enforce_password_policy,
    hash_opaque_token,
    hash_password,
    mint_opaque_token,
    policy_from_settings,
    verify_password,
)
from shop_api.features.app_settings.repository import ApplicationSettingsRepository
from shop_api.features.locales.repository import LocalesRepository
from shop_api.features.notifications.service import NotificationsService
from shop_api.settings import Settings
from shop_db.models import AuthSession, User, UserType

from .schemas import RegisterRequest

logger = logging.getLogger(__name__)


class LoginError(Exception):
    """Raised when supplied credentials do not match an account."""


class AuthService:
    def __init__(self, *, session: Session, settings: Settings) -> None:
        self.session = session
        self.settings = settings

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def registration_enabled(self) -> bool:
        if not self.settings.allow_public_registration:
            return False
        repo = ApplicationSettingsRepository(self.session)
        return bool(repo.value("registration_enabled", True))

    def register(self, payload: RegisterRequest) -> tuple[User, str]:
        email = str(payload.email)
        logger.debug("auth.register.start", extra=log_context(email=email))
        if not self.registration_enabled():
            raise HTTPException(
                status.HTTP_403_FORBIDDEN,
                detail="Registration is currently disabled.",
            )

        password = payload.password.get_secret_value()
        enforce_password_policy(
            password,
            policy=policy_from_settings(self.settings),
            field_path="password",
            confirmation=payload.password_confirmation.get_secret_value(),
            confirmation_path="password_confirmation",
        )
        if self.find_user_by_email(email) is not None:
            raise field_error(
                "email",
                "The email has already been taken.",
                code="email_taken",
            )

        locales = LocalesRepository(self.session)
        country = locales.get_country_by_code(payload.country_code)
        if country is None:
            raise field_error(
                "country_code",
                "The selected country is not available.",
                code="country_not_found",
            )
        language = locales.get_language_for_locale(country.locale)

        user = User(
            name=payload.name,
            email=email,
            hashed_password=hash_password(password),
            user_type=UserType.USER,
            is_active=True,
            country_id=country.id,
            language_id=language.id if language is not None else None,
            failed_login_count=0,
        )
        self.session.add(user)
        self.session.flush()
        self.session.refresh(user)

        token = self.create_session(user_id=user.id)
        NotificationsService(session=self.session, settings=self.settings).queue_welcome(user)
        logger.info("auth.register.success", extra=log_context(user_id=user.id))
        return user, token

    # ------------------------------------------------------------------
    # Sessions / Login
    # ------------------------------------------------------------------

    def login(self, *, email: str, password: str) -> tuple[User, str]:
        user = self.find_user_by_email(email)
        if user is None:
            logger.info("auth.login.failed", extra=log_context(reason="unknown_email"))
            raise LoginError("Invalid credentials")

        self._ensure_login_allowed(user)

        if not verify_password(password, user.hashed_password):
            self._register_failed_login(user)
            logger.info(
                "auth.login.failed",
                extra=log_context(user_id=user.id, attempts=user.failed_login_count),
            )
            raise LoginError("Invalid credentials")

        self._register_successful_login(user)
        token = self.create_session(user_id=user.id)
        logger.info("auth.login.success", extra=log_context(user_id=user.id))
        return user, token

    def create_session(self, *, user_id: UUID) -> str:
        token = mint_opaque_token()
        self.session.add(
            AuthSession(
                user_id=user_id,
                token_hash=hash_opaque_token(token),
                created_at=utc_now(),
                expires_at=utc_now() + self.settings.session_access_ttl,
                revoked_at=None,
            )
        )
        self.session.flush()
        return token

    def revoke_token(self, *, token_hash: str) -> None:
        self.session.execute(
            update(AuthSession)
            .where(AuthSession.token_hash == token_hash)
            .where(AuthSession.revoked_at.is_(None))
            .values(revoked_at=utc_now())
        )

    def revoke_other_sessions(self, *, user_id: UUID, keep_token_hash: str | None) -> None:
        stmt = (
            update(AuthSession)
            .where(AuthSession.user_id == user_id)
            .where(AuthSession.revoked_at.is_(None))
        )
        if keep_token_hash is not None:
            stmt = stmt.where(AuthSession.token_hash != keep_token_hash)
        self.session.execute(stmt.values(revoked_at=utc_now()))

    def find_user_by_email(self, email: str) -> User | None:
        normalized = email.strip().lower()
        if not normalized:
            return None
        stmt = select(User).where(User.email_normalized == normalized).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _ensure_login_allowed(self, user: User) -> None:
        if user.locked_until and user.locked_until > utc_now():
            raise ApiError(
                error_type="locked",
                status_code=status.HTTP_423_LOCKED,
                detail="Account is temporarily locked due to failed login attempts.",
            )
        if not user.is_active:
            raise HTTPException(
                status.HTTP_403_FORBIDDEN,
                detail="User account is inactive.",
            )

    def _register_failed_login(self, user: User) -> None:
        if user.locked_until is not None and user.locked_until <= utc_now():
            # An expired lock starts a fresh failure window.
            user.failed_login_count = 0
            user.locked_until = None
        user.failed_login_count += 1
        threshold = int(self.settings.failed_login_lock_threshold)
        if user.failed_login_count >= threshold:
            user.locked_until = utc_now() + self.settings.failed_login_lock_duration
            logger.warning(
                "auth.login.locked",
                extra=log_context(user_id=user.id, locked_until=user.locked_until.isoformat()),
            )

    def _register_successful_login(self, user: User) -> None:
        user.failed_login_count = 0
        user.locked_until = None
        user.last_login_at = utc_now()


__all__ = ["AuthService", "LoginError"]
