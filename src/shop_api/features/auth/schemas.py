"""Request and response models for authentication."""

from __future__ import annotations

from pydantic import EmailStr, Field, SecretStr, field_validator

from shop_api.common.schema import BaseSchema
from shop_api.features.profile.schemas import UserOut
from shop_db.models import CountryCode


class RegisterRequest(BaseSchema):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: SecretStr
    password_confirmation: SecretStr
    country_code: CountryCode

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        cleaned = value.strip()
        if len(cleaned) < 2:
            raise ValueError("Name must be at least 2 characters.")
        return cleaned

    @field_validator("email")
    @classmethod
    def _limit_email(cls, value: str) -> str:
        if len(value) > 255:
            raise ValueError("Email must be at most 255 characters.")
        return value

    @field_validator("country_code", mode="before")
    @classmethod
    def _upper_country(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value


class LoginRequest(BaseSchema):
    email: EmailStr
    password: SecretStr


class AuthResponse(BaseSchema):
    """Authenticated user plus the bearer token issued for them."""

    user: UserOut
    token: str
    token_type: str = "Bearer"


__all__ = ["AuthResponse", "LoginRequest", "RegisterRequest"]
