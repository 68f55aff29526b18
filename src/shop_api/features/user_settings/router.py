"""Routes for per-user settings."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, Security, status

from shop_api.api.deps import get_user_settings_service
from shop_api.core.auth import AuthenticatedPrincipal
from shop_api.core.http import get_current_principal, require_authenticated, require_csrf
from shop_db.models import User

from .schemas import (
    LocalePreferencesOut,
    LocalePreferencesUpdate,
    NotificationPreferencesUpdate,
    PasswordChangeRequest,
    UserSettingsOut,
)
from .service import UserSettingsService

router = APIRouter(
    prefix="/user/settings",
    tags=["user-settings"],
    dependencies=[Security(require_authenticated)],
)

CurrentUser = Annotated[User, Security(require_authenticated)]
Service = Annotated[UserSettingsService, Depends(get_user_settings_service)]


@router.get(
    "",
    response_model=UserSettingsOut,
    status_code=status.HTTP_200_OK,
    summary="Return (creating if needed) the caller's settings",
)
def read_settings(user: CurrentUser, service: Service) -> UserSettingsOut:
    return service.read(user)


@router.post(
    "/defaults",
    dependencies=[Security(require_csrf)],
    response_model=UserSettingsOut,
    status_code=status.HTTP_200_OK,
    summary="Reset notification preferences to defaults",
)
def reset_settings(user: CurrentUser, service: Service) -> UserSettingsOut:
    return service.reset_defaults(user)


@router.put(
    "/notifications",
    dependencies=[Security(require_csrf)],
    response_model=UserSettingsOut,
    status_code=status.HTTP_200_OK,
    summary="Update notification preferences",
)
def update_notifications(
    payload: NotificationPreferencesUpdate,
    user: CurrentUser,
    service: Service,
) -> UserSettingsOut:
    return service.update_notifications(user, payload)


@router.put(
    "/preferences",
    dependencies=[Security(require_csrf)],
    response_model=LocalePreferencesOut,
    status_code=status.HTTP_200_OK,
    summary="Update language and timezone",
)
def update_preferences(
    payload: LocalePreferencesUpdate,
    user: CurrentUser,
    service: Service,
) -> LocalePreferencesOut:
    return service.update_preferences(user, payload)


@router.post(
    "/password",
    dependencies=[Security(require_csrf)],
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Change password and revoke other sessions",
    responses={
        status.HTTP_422_UNPROCESSABLE_CONTENT: {
            "description": "Wrong current password or weak new password.",
        },
    },
)
def change_password(
    payload: PasswordChangeRequest,
    user: CurrentUser,
    principal: Annotated[AuthenticatedPrincipal, Depends(get_current_principal)],
    service: Service,
) -> Response:
    service.change_password(user, payload, current_token_hash=principal.token_hash)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
