"""Read and update admin-configurable application settings."""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from typing import Any

from sqlalchemy.orm import Session

from shop_api.common.logging import log_context
from shop_api.common.problem_details import ApiError, ProblemDetailsErrorItem
from shop_api.settings import Settings
from shop_db.models import SettingType

from .repository import ApplicationSettingsRepository
from .schemas import SettingsGroupedResponse, SettingsUpdateRequest, SystemStatusResponse

logger = logging.getLogger(__name__)


class ApplicationSettingsService:
    def __init__(self, *, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._repo = ApplicationSettingsRepository(session)

    def read_grouped(self) -> SettingsGroupedResponse:
        grouped: dict[str, dict[str, Any]] = defaultdict(dict)
        for row in self._repo.list_active():
            group = getattr(row.group, "value", row.group)
            grouped[group][row.key] = row.typed_value
        return SettingsGroupedResponse(settings=dict(grouped))

    def update(
        self, *, payload: SettingsUpdateRequest, actor_id: Any = None
    ) -> SettingsGroupedResponse:
        logger.debug(
            "app_settings.update.start",
            extra=log_context(user_id=actor_id, keys=sorted(payload.settings)),
        )
        rows = self._repo.list_by_keys(payload.settings.keys())
        unknown = sorted(set(payload.settings) - set(rows))
        if unknown:
            raise ApiError(
                error_type="validation_error",
                status_code=422,
                detail=f"Unknown setting keys: {', '.join(unknown)}",
                errors=[
                    ProblemDetailsErrorItem(
                        path=f"settings.{key}",
                        message="Unknown setting key.",
                        code="unknown_setting",
                    )
                    for key in unknown
                ],
            )

        errors: list[ProblemDetailsErrorItem] = []
        for key, raw in payload.settings.items():
            row = rows[key]
            try:
                row.typed_value = raw
            except (ValueError, TypeError, json.JSONDecodeError):
                errors.append(
                    ProblemDetailsErrorItem(
                        path=f"settings.{key}",
                        message=f"Value must be a valid {SettingType(row.type).value}.",
                        code="invalid_setting_value",
                    )
                )
        if errors:
            raise ApiError(
                error_type="validation_error",
                status_code=422,
                detail="One or more setting values are invalid.",
                errors=errors,
            )

        self._session.flush()
        logger.info(
            "app_settings.update.success",
            extra=log_context(user_id=actor_id, keys=sorted(payload.settings)),
        )
        return self.read_grouped()

    def system_status(self) -> SystemStatusResponse:
        return SystemStatusResponse(
            maintenance_mode=bool(self._repo.value("maintenance_mode", False)),
            registration_enabled=bool(self._repo.value("registration_enabled", True)),
            email_notifications=bool(self._repo.value("email_notifications_enabled", True)),
            sms_notifications=bool(self._repo.value("sms_notifications_enabled", False)),
        )


__all__ = ["ApplicationSettingsService"]
