"""Admin endpoints for application settings."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Security, status

from shop_api.api.deps import get_app_settings_service, get_app_settings_service_read
from shop_api.core.http import require_authenticated, require_csrf, require_permission
from shop_db.models import User

from .schemas import SettingsGroupedResponse, SettingsUpdateRequest, SystemStatusResponse
from .service import ApplicationSettingsService

router = APIRouter(
    prefix="/admin/settings",
    tags=["admin-settings"],
    dependencies=[Security(require_authenticated)],
)


@router.get(
    "",
    response_model=SettingsGroupedResponse,
    status_code=status.HTTP_200_OK,
    summary="Read application settings grouped by section",
)
def read_settings(
    service: Annotated[ApplicationSettingsService, Depends(get_app_settings_service_read)],
    _actor: Annotated[User, Security(require_permission("settings.manage"))],
) -> SettingsGroupedResponse:
    return service.read_grouped()


@router.put(
    "",
    response_model=SettingsGroupedResponse,
    status_code=status.HTTP_200_OK,
    summary="Update application settings",
    dependencies=[Security(require_csrf)],
    responses={
        status.HTTP_422_UNPROCESSABLE_CONTENT: {
            "description": "Unknown setting keys or values of the wrong type.",
        },
    },
)
def update_settings(
    payload: SettingsUpdateRequest,
    service: Annotated[ApplicationSettingsService, Depends(get_app_settings_service)],
    actor: Annotated[User, Security(require_permission("settings.manage"))],
) -> SettingsGroupedResponse:
    return service.update(payload=payload, actor_id=actor.id)


@router.get(
    "/system-status",
    response_model=SystemStatusResponse,
    status_code=status.HTTP_200_OK,
    summary="Summarise operational toggles",
)
def read_system_status(
    service: Annotated[ApplicationSettingsService, Depends(get_app_settings_service_read)],
    _actor: Annotated[User, Security(require_permission("settings.manage"))],
) -> SystemStatusResponse:
    return service.system_status()


__all__ = ["router"]
