"""Shared auth/permission error types."""


class AuthenticationError(Exception):
    """Raised when a request cannot be authenticated."""


class PermissionDeniedError(Exception):
    """Raised when a principal lacks a required permission."""

    def __init__(self, permission_key: str) -> None:
        self.permission_key = permission_key
        super().__init__(f"Permission '{permission_key}' denied")
