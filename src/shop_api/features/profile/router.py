"""Routes for the current user's profile."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Security, status

from shop_api.api.deps import get_profile_service, get_profile_service_read
from shop_api.core.http import require_authenticated, require_csrf
from shop_db.models import User

from .schemas import ProfileStats, ProfileUpdate, UserOut
from .service import ProfileService

router = APIRouter(
    prefix="/profile",
    tags=["profile"],
    dependencies=[Security(require_authenticated)],
)

CurrentUser = Annotated[User, Security(require_authenticated)]


@router.get(
    "",
    response_model=UserOut,
    status_code=status.HTTP_200_OK,
    summary="Return the authenticated user's profile",
    response_model_exclude_none=True,
    responses={status.HTTP_401_UNAUTHORIZED: {"description": "Authentication required."}},
)
def read_profile(
    user: CurrentUser,
    service: Annotated[ProfileService, Depends(get_profile_service_read)],
) -> UserOut:
    return service.read(user)


@router.put(
    "",
    dependencies=[Security(require_csrf)],
    response_model=UserOut,
    status_code=status.HTTP_200_OK,
    summary="Update name, email or password",
    response_model_exclude_none=True,
    responses={
        status.HTTP_401_UNAUTHORIZED: {"description": "Authentication required."},
        status.HTTP_422_UNPROCESSABLE_CONTENT: {
            "description": "Empty payload, email taken or wrong old password.",
        },
    },
)
def update_profile(
    payload: ProfileUpdate,
    user: CurrentUser,
    service: Annotated[ProfileService, Depends(get_profile_service)],
) -> UserOut:
    return service.update(user, payload)


@router.get(
    "/stats",
    response_model=ProfileStats,
    status_code=status.HTTP_200_OK,
    summary="Order statistics for the authenticated user",
)
def read_profile_stats(
    user: CurrentUser,
    service: Annotated[ProfileService, Depends(get_profile_service_read)],
) -> ProfileStats:
    return service.stats(user)


__all__ = ["router"]
