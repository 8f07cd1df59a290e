"""Enums for roster models and filters."""

from enum import Enum


class StatusFilter(str, Enum):
    """Visibility filter applied by the roster projection."""
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"
    
    @classmethod
    def get_all_values(cls):
        """Get all filter values as list."""
        return [status.value for status in cls]


class ActorRole(str, Enum):
    """Roles the authorization layer may grant to an actor."""
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    EDITOR = "editor"
    
    @classmethod
    def get_all_values(cls):
        """Get all role values as list."""
        return [role.value for role in cls]


class RosterScope(str, Enum):
    """Which variant of the roster a fetch returns."""
    ADMIN = "admin"
    PUBLIC = "public"
