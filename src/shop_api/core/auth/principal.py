"""Lightweight identity representation produced by the auth pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from uuid import UUID


class AuthVia(str, enum.Enum):
    """Transport used to authenticate the request."""

    SESSION = "session"
    BEARER = "bearer"


@dataclass(slots=True)
class AuthenticatedPrincipal:
    """Identity information available to downstream handlers."""

    user_id: UUID
    auth_via: AuthVia
    token_hash: str
