"""Authentication contracts shared by HTTP dependencies."""

from .errors import AuthenticationError, PermissionDeniedError
from .pipeline import TokenAuthenticator, authenticate_request
from .principal import AuthenticatedPrincipal, AuthVia

__all__ = [
    "AuthVia",
    "AuthenticatedPrincipal",
    "AuthenticationError",
    "PermissionDeniedError",
    "TokenAuthenticator",
    "authenticate_request",
]
