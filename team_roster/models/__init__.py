"""Database models initialization."""

# Base classes
from .base import BaseModel, TimestampMixin, AuditMixin, utc_now

# Core models
from .team_member import TeamMember

# Enums
from .enums import StatusFilter, ActorRole, RosterScope

__all__ = [
    # Base classes
    "BaseModel",
    "TimestampMixin",
    "AuditMixin",
    "utc_now",
    
    # Core models
    "TeamMember",
    
    # Enums
    "StatusFilter",
    "ActorRole",
    "RosterScope",
]
