"""HTTP interface for registration, login and logout."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, Security, status

from shop_api.api.deps import SettingsDep, get_auth_service
from shop_api.core.auth import AuthenticatedPrincipal
from shop_api.core.http import (
    clear_auth_cookies,
    get_current_principal,
    require_authenticated,
    require_csrf,
    set_auth_cookies,
)
from shop_api.features.profile.schemas import UserOut
from shop_db.models import User

from .schemas import AuthResponse, LoginRequest, RegisterRequest
from .service import AuthService, LoginError

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a customer account and sign in",
    responses={
        status.HTTP_403_FORBIDDEN: {"description": "Public registration is disabled."},
        status.HTTP_422_UNPROCESSABLE_CONTENT: {"description": "Invalid registration data."},
    },
)
def register(
    payload: RegisterRequest,
    response: Response,
    service: Annotated[AuthService, Depends(get_auth_service)],
    settings: SettingsDep,
) -> AuthResponse:
    user, token = service.register(payload)
    set_auth_cookies(response, settings, token)
    return AuthResponse(user=UserOut.model_validate(user), token=token)


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Authenticate with email and password",
    responses={
        status.HTTP_401_UNAUTHORIZED: {"description": "Invalid credentials."},
        status.HTTP_403_FORBIDDEN: {"description": "User account is inactive."},
        status.HTTP_423_LOCKED: {"description": "Too many failed attempts."},
    },
)
def login(
    payload: LoginRequest,
    response: Response,
    service: Annotated[AuthService, Depends(get_auth_service)],
    settings: SettingsDep,
) -> AuthResponse:
    try:
        user, token = service.login(
            email=str(payload.email),
            password=payload.password.get_secret_value(),
        )
    except LoginError as exc:
        # Failed-login counters/lockouts must be persisted even when returning 401.
        service.session.commit()
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    set_auth_cookies(response, settings, token)
    return AuthResponse(user=UserOut.model_validate(user), token=token)


@router.post(
    "/logout",
    dependencies=[Security(require_csrf)],
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke the current token and clear cookies",
    responses={status.HTTP_401_UNAUTHORIZED: {"description": "Authentication required."}},
)
def logout(
    _user: Annotated[User, Security(require_authenticated)],
    principal: Annotated[AuthenticatedPrincipal, Depends(get_current_principal)],
    service: Annotated[AuthService, Depends(get_auth_service)],
    settings: SettingsDep,
) -> Response:
    service.revoke_token(token_hash=principal.token_hash)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    clear_auth_cookies(response, settings)
    return response


__all__ = ["router"]
