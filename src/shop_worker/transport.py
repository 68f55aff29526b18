"""Mail delivery backends."""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Protocol

from .rendering import RenderedMail
from .settings import Settings

logger = logging.getLogger(__name__)


class MailTransport(Protocol):
    def send(self, *, recipient: str, mail: RenderedMail) -> None: ...


class LogTransport:
    """Writes messages to the log instead of sending them; the default for dev."""

    def send(self, *, recipient: str, mail: RenderedMail) -> None:
        logger.info(
            "mail.transport.log",
            extra={"recipient": recipient, "subject": mail.subject},
        )


class SmtpTransport:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def build_message(self, *, recipient: str, mail: RenderedMail) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._settings.mail_from
        message["To"] = recipient
        message["Subject"] = mail.subject
        message.set_content(mail.body)
        return message

    def send(self, *, recipient: str, mail: RenderedMail) -> None:
        settings = self._settings
        message = self.build_message(recipient=recipient, mail=mail)
        with smtplib.SMTP(
            settings.smtp_host,
            settings.smtp_port,
            timeout=settings.smtp_timeout_seconds,
        ) as server:
            if settings.smtp_starttls:
                server.starttls(context=ssl.create_default_context())
            if settings.smtp_username and settings.smtp_password is not None:
                server.login(settings.smtp_username, settings.smtp_password.get_secret_value())
            server.send_message(message)


def build_transport(settings: Settings) -> MailTransport:
    if settings.mail_transport == "smtp":
        return SmtpTransport(settings)
    return LogTransport()


__all__ = ["LogTransport", "MailTransport", "SmtpTransport", "build_transport"]
