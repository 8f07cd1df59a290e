"""Team member schemas for request/response."""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from team_roster.models.enums import StatusFilter
from team_roster.utils.messages import get_message
from team_roster.utils.placeholder import clean_skills, derive_placeholder, is_valid_placeholder
from team_roster.utils.sanitize_html import sanitize_html_content

MAX_SKILL_LENGTH = 100


def _required_text(value: str, field: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(get_message("validation", "required_field", field=field))
    return value


def _check_skills(skills: List[str]) -> List[str]:
    cleaned = clean_skills(skills)
    if any(len(skill) > MAX_SKILL_LENGTH for skill in cleaned):
        raise ValueError(f"Each skill must be at most {MAX_SKILL_LENGTH} characters")
    return cleaned


def _check_placeholder(value: str) -> str:
    if not is_valid_placeholder(value):
        raise ValueError(get_message("validation", "invalid_placeholder"))
    return value


# ===== REQUEST SCHEMAS =====

class TeamMemberCreate(BaseModel):
    """Schema for creating a team member.

    ``placeholder`` may be omitted, in which case it is derived from ``name``.
    ``display_order`` may be omitted, in which case the member goes last.
    """
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., max_length=100, description="Member name")
    role: str = Field(..., max_length=100, description="Role/title within the team")
    placeholder: Optional[str] = Field(None, description="1-4 uppercase letters used as avatar")
    short_description: Optional[str] = Field(None, max_length=500)
    full_description: Optional[str] = Field(None, max_length=3000)
    experience: Optional[str] = Field(None, max_length=200)
    education: Optional[str] = Field(None, max_length=1000)
    skills: List[str] = Field(default_factory=list, description="Skills in display order")
    display_order: Optional[int] = Field(None, ge=1, description="Position in the roster")
    is_active: bool = Field(default=True, description="Visible on the public page")

    @field_validator('name')
    @classmethod
    def validate_name(cls, name: str) -> str:
        """Validate and clean name."""
        return _required_text(name, "name")

    @field_validator('role')
    @classmethod
    def validate_role(cls, role: str) -> str:
        """Validate and clean role."""
        return _required_text(role, "role")

    @field_validator('placeholder')
    @classmethod
    def validate_placeholder(cls, placeholder: Optional[str]) -> Optional[str]:
        if placeholder is None:
            return None
        return _check_placeholder(placeholder.strip())

    @field_validator('skills')
    @classmethod
    def validate_skills(cls, skills: List[str]) -> List[str]:
        """Drop empty skills before persisting."""
        return _check_skills(skills)

    @field_validator('full_description')
    @classmethod
    def sanitize_full_description(cls, v: Optional[str]) -> Optional[str]:
        """Sanitize HTML content in full description."""
        if v:
            return sanitize_html_content(v)
        return v

    @model_validator(mode="after")
    def fill_placeholder(self) -> "TeamMemberCreate":
        """Derive avatar initials from the name when none were given."""
        if self.placeholder is None:
            self.placeholder = _check_placeholder(derive_placeholder(self.name))
        return self


class TeamMemberUpdate(BaseModel):
    """Schema for updating a team member; every field is optional."""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, max_length=100)
    role: Optional[str] = Field(None, max_length=100)
    placeholder: Optional[str] = None
    short_description: Optional[str] = Field(None, max_length=500)
    full_description: Optional[str] = Field(None, max_length=3000)
    experience: Optional[str] = Field(None, max_length=200)
    education: Optional[str] = Field(None, max_length=1000)
    skills: Optional[List[str]] = None
    display_order: Optional[int] = Field(None, ge=1)
    is_active: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, name: Optional[str]) -> Optional[str]:
        """Validate and clean name if provided."""
        return _required_text(name, "name") if name is not None else None

    @field_validator('role')
    @classmethod
    def validate_role(cls, role: Optional[str]) -> Optional[str]:
        """Validate and clean role if provided."""
        return _required_text(role, "role") if role is not None else None

    @field_validator('placeholder')
    @classmethod
    def validate_placeholder(cls, placeholder: Optional[str]) -> Optional[str]:
        return _check_placeholder(placeholder.strip()) if placeholder is not None else None

    @field_validator('skills')
    @classmethod
    def validate_skills(cls, skills: Optional[List[str]]) -> Optional[List[str]]:
        return _check_skills(skills) if skills is not None else None

    @field_validator('full_description')
    @classmethod
    def sanitize_full_description(cls, v: Optional[str]) -> Optional[str]:
        if v:
            return sanitize_html_content(v)
        return v


class ReorderRequest(BaseModel):
    """Full ordered list of member ids; position + 1 becomes display_order."""
    member_ids: List[str] = Field(..., description="Every member id, in the new order; empty for an empty roster")


# ===== RESPONSE SCHEMAS =====

class CVAttachment(BaseModel):
    """CV attachment metadata."""
    file_name: str
    file_url: str
    file_size_bytes: int
    uploaded_at: str

    @classmethod
    def from_team_member_model(cls, team_member) -> Optional["CVAttachment"]:
        if not team_member.cv_file_url:
            return None
        return cls(
            file_name=team_member.cv_file_name or "",
            file_url=team_member.cv_file_url,
            file_size_bytes=team_member.cv_file_size or 0,
            uploaded_at=team_member.cv_uploaded_at.isoformat() if team_member.cv_uploaded_at else ""
        )


class TeamMemberResponse(BaseModel):
    """Schema for the admin view of a team member."""
    id: str
    name: str
    role: str
    placeholder: str
    short_description: Optional[str] = None
    full_description: Optional[str] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    cv: Optional[CVAttachment] = None
    display_order: int
    is_active: bool
    created_at: str
    updated_at: Optional[str] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None

    @classmethod
    def from_team_member_model(cls, team_member) -> "TeamMemberResponse":
        """Create TeamMemberResponse from TeamMember model."""
        return cls(
            id=team_member.id,
            name=team_member.name,
            role=team_member.role,
            placeholder=team_member.placeholder,
            short_description=team_member.short_description,
            full_description=team_member.full_description,
            experience=team_member.experience,
            education=team_member.education,
            skills=list(team_member.skills or []),
            cv=CVAttachment.from_team_member_model(team_member),
            display_order=team_member.display_order,
            is_active=team_member.is_active,
            created_at=team_member.created_at.isoformat() if team_member.created_at else "",
            updated_at=team_member.updated_at.isoformat() if team_member.updated_at else None,
            created_by=team_member.created_by,
            updated_by=team_member.updated_by
        )

    model_config = ConfigDict(from_attributes=True)


class TeamMemberPublic(BaseModel):
    """Schema for the public page (reduced, no attachment metadata)."""
    id: str
    name: str
    role: str
    placeholder: str
    short_description: Optional[str] = None
    full_description: Optional[str] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    display_order: int
    has_cv: bool = False

    @classmethod
    def from_team_member_model(cls, team_member) -> "TeamMemberPublic":
        """Create TeamMemberPublic from TeamMember model."""
        return cls(
            id=team_member.id,
            name=team_member.name,
            role=team_member.role,
            placeholder=team_member.placeholder,
            short_description=team_member.short_description,
            full_description=team_member.full_description,
            experience=team_member.experience,
            education=team_member.education,
            skills=list(team_member.skills or []),
            display_order=team_member.display_order,
            has_cv=team_member.has_cv
        )

    model_config = ConfigDict(from_attributes=True)


class TeamStatistics(BaseModel):
    """Roster counts."""
    total_members: int
    active_members: int
    inactive_members: int
    members_with_cv: int


# ===== FILTER SCHEMAS =====

class TeamMemberFilterParams(BaseModel):
    """Search and status filter applied to the cached roster."""
    search: str = Field(default="", description="Search in name or role")
    status: StatusFilter = Field(default=StatusFilter.ALL, description="Filter by active status")
