"""HTTP dependency helpers built on the shared auth contracts."""

from .dependencies import (
    get_current_principal,
    get_optional_user,
    require_authenticated,
    require_csrf,
    require_permission,
)
from .errors import register_auth_exception_handlers
from .cookies import clear_auth_cookies, set_auth_cookies

__all__ = [
    "get_current_principal",
    "get_optional_user",
    "require_authenticated",
    "require_csrf",
    "require_permission",
    "register_auth_exception_handlers",
    "set_auth_cookies",
    "clear_auth_cookies",
]
