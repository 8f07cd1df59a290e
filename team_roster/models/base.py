"""Base model mixins shared by table models."""

from datetime import datetime, timezone
from typing import Optional
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Timezone-aware UTC timestamp for created/updated/uploaded columns."""
    return datetime.now(timezone.utc)


class TimestampMixin(SQLModel):
    """Creation and modification timestamps."""
    
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: Optional[datetime] = Field(default=None)


class AuditMixin(SQLModel):
    """Identity of the actor behind each write (opaque to the roster)."""
    
    created_by: Optional[str] = Field(default=None, max_length=64)
    updated_by: Optional[str] = Field(default=None, max_length=64)


class BaseModel(TimestampMixin, AuditMixin):
    """Base class for all roster table models."""
    
    def touch(self, actor_id: Optional[str] = None) -> None:
        """Stamp a modification by ``actor_id``."""
        self.updated_at = utc_now()
        self.updated_by = actor_id
