"""Shop worker settings (Pydantic v2)."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings

from shop_common.settings import (
    DatabaseSettingsMixin,
    create_settings_accessors,
    normalize_log_format,
    normalize_log_level,
    shop_settings_config,
)


class Settings(DatabaseSettingsMixin, BaseSettings):
    """Worker settings loaded from SHOP_* env vars (and repo-root .env)."""

    model_config = shop_settings_config(populate_by_name=True)

    # ---- Worker identity & loop -------------------------------------------
    worker_id: str | None = None
    worker_batch_size: int = Field(10, ge=1, le=100)
    worker_poll_interval: float = Field(1.0, gt=0)
    worker_poll_interval_max: float = Field(10.0, gt=0)
    log_format: str = "console"
    log_level: str | None = None
    worker_log_level: str | None = None

    # ---- Queue leasing / retries ------------------------------------------
    worker_lease_seconds: int = Field(300, ge=1)
    worker_backoff_base_seconds: int = Field(30, ge=0)
    worker_backoff_max_seconds: int = Field(3600, ge=0)

    # ---- Delivery ----------------------------------------------------------
    mail_transport: Literal["log", "smtp"] = "log"
    mail_from: str = "Shop <no-reply@shop.local>"
    smtp_host: str = "localhost"
    smtp_port: int = Field(25, ge=1, le=65535)
    smtp_username: str | None = None
    smtp_password: SecretStr | None = None
    smtp_starttls: bool = False
    smtp_timeout_seconds: float = Field(10.0, gt=0)

    @model_validator(mode="after")
    def _finalize(self) -> Settings:
        self.log_format = normalize_log_format(self.log_format, env_var="SHOP_LOG_FORMAT")
        self.log_level = normalize_log_level(self.log_level, env_var="SHOP_LOG_LEVEL")
        self.worker_log_level = normalize_log_level(
            self.worker_log_level,
            env_var="SHOP_WORKER_LOG_LEVEL",
        )
        return self

    @property
    def effective_worker_log_level(self) -> str:
        return self.worker_log_level or self.log_level or "INFO"

    def backoff_seconds(self, attempt_count: int) -> int:
        base = max(0, int(self.worker_backoff_base_seconds))
        delay = base * (2 ** max(attempt_count - 1, 0))
        return min(int(self.worker_backoff_max_seconds), int(delay))


get_settings, reload_settings = create_settings_accessors(Settings)


__all__ = ["Settings", "get_settings", "reload_settings"]
