"""Insert notification emails into the ``mail_jobs`` outbox.

Delivery happens out of band in ``shop_worker``; nothing here talks to SMTP.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from shop_api.common.logging import log_context
from shop_api.common.time import utc_now
from shop_api.features.app_settings.repository import ApplicationSettingsRepository
from shop_api.settings import Settings
from shop_db.models import MailJob, MailJobStatus, Order, OrderStatus, User

from .payloads import (
    order_confirmation_payload,
    order_status_update_payload,
    welcome_payload,
)

logger = logging.getLogger(__name__)

TEMPLATE_WELCOME = "welcome"
TEMPLATE_ORDER_CONFIRMATION = "order_confirmation"
TEMPLATE_ORDER_STATUS_UPDATE = "order_status_update"


class NotificationsService:
    def __init__(self, *, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._app_settings = ApplicationSettingsRepository(session)

    def emails_enabled(self) -> bool:
        return bool(self._app_settings.value("email_notifications_enabled"))

    def queue(self, *, template: str, recipient: str, payload: dict[str, Any]) -> MailJob | None:
        if not self.emails_enabled():
            logger.debug(
                "notifications.queue.skipped",
                extra=log_context(template=template, reason="email_notifications_disabled"),
            )
            return None
        job = MailJob(
            template=template,
            recipient=recipient,
            payload=payload,
            status=MailJobStatus.QUEUED,
            attempt_count=0,
            max_attempts=self._settings.mail_max_attempts,
            available_at=utc_now(),
        )
        self._session.add(job)
        self._session.flush()
        logger.info(
            "notifications.queue.success",
            extra=log_context(mail_job_id=str(job.id), template=template),
        )
        return job

    def queue_welcome(self, user: User) -> MailJob | None:
        return self.queue(
            template=TEMPLATE_WELCOME,
            recipient=user.email,
            payload=welcome_payload(
                user,
                app_name=self._app_name(),
                app_url=self._app_url(),
            ),
        )

    def queue_order_confirmation(self, order: Order) -> MailJob | None:
        return self.queue(
            template=TEMPLATE_ORDER_CONFIRMATION,
            recipient=order.user.email,
            payload=order_confirmation_payload(
                order,
                currency_symbol=self._currency_symbol(),
                app_name=self._app_name(),
                app_url=self._app_url(),
            ),
        )

    def queue_order_status_update(
        self,
        order: Order,
        *,
        old_status: OrderStatus,
        new_status: OrderStatus,
    ) -> MailJob | None:
        preferences = order.user.settings
        if preferences is not None and not preferences.order_update_notifications:
            logger.debug(
                "notifications.queue.skipped",
                extra=log_context(
                    order_id=order.id,
                    template=TEMPLATE_ORDER_STATUS_UPDATE,
                    reason="user_opted_out",
                ),
            )
            return None
        return self.queue(
            template=TEMPLATE_ORDER_STATUS_UPDATE,
            recipient=order.user.email,
            payload=order_status_update_payload(
                order,
                old_status=old_status,
                new_status=new_status,
                currency_symbol=self._currency_symbol(),
                app_name=self._app_name(),
            ),
        )

    def _currency_symbol(self) -> str:
        return str(self._app_settings.value("default_currency"))

    def _app_name(self) -> str:
        return str(self._app_settings.value("app_name"))

    def _app_url(self) -> str:
        return str(self._app_settings.value("app_url", self._settings.public_web_url)).rstrip("/")


__all__ = [
    "TEMPLATE_ORDER_CONFIRMATION",
    "TEMPLATE_ORDER_STATUS_UPDATE",
    "TEMPLATE_WELCOME",
    "NotificationsService",
]
