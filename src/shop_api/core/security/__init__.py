"""Security primitives for hashing and token handling."""

from .hashing import hash_password, verify_password
from .password_policy import PasswordPolicy, enforce_password_policy, policy_from_settings
from .tokens import hash_opaque_token, mint_opaque_token

__all__ = [
    "PasswordPolicy",
    "enforce_password_policy",
    "hash_opaque_token",
    "hash_password",
    "mint_opaque_token",
    "policy_from_settings",
    "verify_password",
]
