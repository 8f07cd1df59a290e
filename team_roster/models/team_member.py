"""Team member model for the roster."""

import uuid
from datetime import datetime
from typing import List, Optional
from sqlmodel import Field, SQLModel, Column, JSON

from .base import BaseModel


class TeamMember(BaseModel, SQLModel, table=True):
    """Team member with optional CV attachment and a roster position."""
    
    __tablename__ = "team_members"
    
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True, max_length=36)
    name: str = Field(max_length=100, nullable=False, index=True)
    role: str = Field(max_length=100, nullable=False, description="Role/title within the team")
    placeholder: str = Field(max_length=4, nullable=False, description="Avatar initials")
    short_description: Optional[str] = Field(default=None, max_length=500)
    full_description: Optional[str] = Field(default=None, description="Long bio (HTML)")
    experience: Optional[str] = Field(default=None, max_length=200)
    education: Optional[str] = Field(default=None, max_length=1000)
    skills: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    
    # Ordering and visibility
    display_order: int = Field(nullable=False, index=True, description="Position in the roster (1=first)")
    is_active: bool = Field(default=True, index=True)
    
    # CV attachment
    cv_file_name: Optional[str] = Field(default=None, max_length=255)
    cv_file_url: Optional[str] = Field(default=None, max_length=500)
    cv_file_size: Optional[int] = Field(default=None)
    cv_uploaded_at: Optional[datetime] = Field(default=None)
    cv_storage_key: Optional[str] = Field(default=None, max_length=500)
    
    def __repr__(self) -> str:
        return f"<TeamMember(id={self.id}, name={self.name}, order={self.display_order})>"
    
    @property
    def has_cv(self) -> bool:
        return bool(self.cv_file_url)
    
    def attach_cv(self, file_name: str, file_url: str, file_size: int, storage_key: str, uploaded_at: datetime) -> None:
        """Replace the CV attachment metadata wholesale."""
        self.cv_file_name = file_name
        self.cv_file_url = file_url
        self.cv_file_size = file_size
        self.cv_storage_key = storage_key
        self.cv_uploaded_at = uploaded_at
    
    def detach_cv(self) -> None:
        """Forget every piece of CV attachment metadata."""
        self.cv_file_name = None
        self.cv_file_url = None
        self.cv_file_size = None
        self.cv_storage_key = None
        self.cv_uploaded_at = None
