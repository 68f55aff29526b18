"""Opaque token helpers."""

from __future__ import annotations

import base64
import hashlib
import secrets


def mint_opaque_token(length: int = 48) -> str:
    """Return a random opaque token suitable for bearer headers or cookies."""

    if length <= 0:
        raise ValueError("Token length must be positive")
    return secrets.token_urlsafe(length)


def hash_opaque_token(token: str) -> str:
    """Hash an opaque token for at-rest storage."""

    digest = hashlib.sha256(token.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


__all__ = ["hash_opaque_token", "mint_opaque_token"]
