"""Auth module init."""

from .jwt import create_access_token, verify_token
from .permissions import (
    get_current_actor,
    require_roles,
    roster_editor_required,
    roster_admin_required,
)

__all__ = [
    # JWT functions
    "create_access_token",
    "verify_token",
    # Auth dependencies
    "get_current_actor",
    "require_roles",
    "roster_editor_required",
    "roster_admin_required",
]
