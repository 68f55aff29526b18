"""Queue notification emails into the mail outbox."""

from .service import NotificationsService

__all__ = ["NotificationsService"]
