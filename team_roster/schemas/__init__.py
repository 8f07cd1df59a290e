"""Schemas initialization."""

# Shared schemas
from .shared import (
    ApiResponse,
    MessageResponse,
    OperationResult,
    ValidationErrorDetail,
    ValidationErrorResponse,
)

# Team member schemas
from .team_member import (
    TeamMemberCreate,
    TeamMemberUpdate,
    ReorderRequest,
    CVAttachment,
    TeamMemberResponse,
    TeamMemberPublic,
    TeamStatistics,
    TeamMemberFilterParams,
)

# CV file input
from .cv_file import CVFile
