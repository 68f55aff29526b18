"""Shop mail worker: drains the ``mail_jobs`` outbox."""

from .settings import Settings, get_settings, reload_settings

__all__ = ["Settings", "get_settings", "reload_settings"]
