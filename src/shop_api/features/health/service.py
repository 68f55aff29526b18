"""Service layer for the health module."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shop_api.common.logging import log_context
from shop_api.settings import Settings

from .schemas import HealthCheckResponse, HealthComponentStatus

logger = logging.getLogger(__name__)


class HealthService:
    """Compute health responses for readiness/liveness checks."""

    def __init__(self, *, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings

    def status(self) -> HealthCheckResponse:
        """Return the overall system health."""
        logger.debug(
            "health.status.start",
            extra=log_context(app_version=self._settings.app_version),
        )

        components = [
            HealthComponentStatus(
                name="api",
                status="available",
                detail=f"v{self._settings.app_version}",
            ),
            self._database_component(),
        ]
        degraded = any(component.status != "available" for component in components)
        response = HealthCheckResponse(
            status="degraded" if degraded else "ok",
            timestamp=datetime.now(tz=UTC),
            components=components,
        )

        logger.info(
            "health.status.success",
            extra=log_context(status=response.status, component_count=len(components)),
        )
        return response

    def _database_component(self) -> HealthComponentStatus:
        try:
            self._session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning(
                "health.database.unavailable",
                extra=log_context(error=type(exc).__name__),
            )
            return HealthComponentStatus(
                name="database",
                status="unavailable",
                detail=type(exc).__name__,
            )
        return HealthComponentStatus(name="database", status="available")
