"""Runtime password validation helpers."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import status

from shop_api.common.problem_details import ApiError, ProblemDetailsErrorItem
from shop_api.settings import Settings

MAX_PASSWORD_LENGTH = 128


@dataclass(frozen=True, slots=True)
class PasswordPolicy:
    min_length: int
    require_letter: bool = False
    require_number: bool = False


def policy_from_settings(settings: Settings) -> PasswordPolicy:
    return PasswordPolicy(min_length=settings.auth_password_min_length)


def enforce_password_policy(
    password: str,
    *,
    policy: PasswordPolicy,
    field_path: str,
    confirmation: str | None = None,
    confirmation_path: str | None = None,
) -> None:
    """Raise a validation error when ``password`` violates ``policy``."""

    errors: list[ProblemDetailsErrorItem] = []
    if len(password) < policy.min_length:
        errors.append(
            ProblemDetailsErrorItem(
                path=field_path,
                code="password_too_short",
                message=f"Password must be at least {policy.min_length} characters.",
            )
        )
    if len(password) > MAX_PASSWORD_LENGTH:
        errors.append(
            ProblemDetailsErrorItem(
                path=field_path,
                code="password_too_long",
                message=f"Password must be at most {MAX_PASSWORD_LENGTH} characters.",
            )
        )
    if policy.require_letter and not any(character.isalpha() for character in password):
        errors.append(
            ProblemDetailsErrorItem(
                path=field_path,
                code="password_missing_letter",
                message="Password must include at least one letter.",
            )
        )
    if policy.require_number and not any(character.isdigit() for character in password):
        errors.append(
            ProblemDetailsErrorItem(
                path=field_path,
                code="password_missing_number",
                message="Password must include at least one number.",
            )
        )
    if confirmation is not None and confirmation != password:
        errors.append(
            ProblemDetailsErrorItem(
                path=confirmation_path or f"{field_path}_confirmation",
                code="password_mismatch",
                message="Password confirmation does not match.",
            )
        )

    if errors:
        raise ApiError(
            error_type="validation_error",
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail="Password does not meet requirements.",
            errors=errors,
        )


__all__ = ["PasswordPolicy", "enforce_password_policy", "policy_from_settings"]
