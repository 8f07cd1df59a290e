"""Team roster endpoints."""

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from team_roster.auth.permissions import roster_admin_required, roster_editor_required
from team_roster.core.database import get_db
from team_roster.core.exceptions import ValidationError
from team_roster.repositories.team_member import TeamMemberRepository
from team_roster.schemas.shared import ApiResponse
from team_roster.schemas.team_member import (
    CVAttachment,
    ReorderRequest,
    TeamMemberCreate,
    TeamMemberPublic,
    TeamMemberResponse,
    TeamMemberUpdate,
    TeamStatistics,
)
from team_roster.services.team_member import TeamMemberService
from team_roster.utils.cv_storage import CVStorage
from team_roster.utils.messages import get_message

logger = logging.getLogger(__name__)

router = APIRouter()


def get_cv_storage() -> CVStorage:
    """Get CV storage dependency."""
    return CVStorage()


async def get_team_member_service(
    session: AsyncSession = Depends(get_db),
    cv_storage: CVStorage = Depends(get_cv_storage),
) -> TeamMemberService:
    """Get team member service dependency."""
    team_member_repo = TeamMemberRepository(session)
    return TeamMemberService(team_member_repo, cv_storage)


@router.get("/public", response_model=ApiResponse[List[TeamMemberPublic]], summary="Get public team members")
async def get_public_team_members(
    team_member_service: TeamMemberService = Depends(get_team_member_service),
):
    """
    Get active team members for the public team page.

    Public endpoint - no authentication required.
    """
    members = await team_member_service.get_public_team_members()
    return ApiResponse(data=members)


@router.get("/", response_model=ApiResponse[List[TeamMemberResponse]], summary="Get the full roster")
async def get_team_members(
    current_actor: Dict = Depends(roster_editor_required),
    team_member_service: TeamMemberService = Depends(get_team_member_service),
):
    """
    Get every team member, active and inactive, ordered by display_order.

    Requires admin, editor or super_admin role.
    """
    members = await team_member_service.get_team_members()
    return ApiResponse(data=members)


@router.get("/statistics", response_model=ApiResponse[TeamStatistics], summary="Get roster statistics")
async def get_team_statistics(
    current_actor: Dict = Depends(roster_editor_required),
    team_member_service: TeamMemberService = Depends(get_team_member_service),
):
    """
    Get roster counts.

    Requires admin, editor or super_admin role.
    """
    return ApiResponse(data=await team_member_service.get_statistics())


@router.put("/reorder", response_model=ApiResponse[dict], summary="Reorder the roster")
async def reorder_team_members(
    reorder_data: ReorderRequest,
    current_actor: Dict = Depends(roster_editor_required),
    team_member_service: TeamMemberService = Depends(get_team_member_service),
):
    """
    Apply a full ordering of the roster.

    Requires admin, editor or super_admin role.

    **JSON Body:**
    - member_ids: every member id exactly once, in the new order

    Returns 409 when the ids do not match the roster.
    """
    result = await team_member_service.reorder_team_members(reorder_data.member_ids, current_actor["id"])
    return ApiResponse(message=result.message)


@router.get("/{team_member_id}", response_model=ApiResponse[TeamMemberResponse], summary="Get team member by ID")
async def get_team_member(
    team_member_id: str,
    current_actor: Dict = Depends(roster_editor_required),
    team_member_service: TeamMemberService = Depends(get_team_member_service),
):
    """
    Get team member by ID.

    Requires admin, editor or super_admin role.
    """
    return ApiResponse(data=await team_member_service.get_team_member(team_member_id))


@router.post("/", response_model=ApiResponse[TeamMemberResponse], status_code=status.HTTP_201_CREATED, summary="Create a new team member")
async def create_team_member(
    team_member_data: TeamMemberCreate,
    current_actor: Dict = Depends(roster_editor_required),
    team_member_service: TeamMemberService = Depends(get_team_member_service),
):
    """
    Create a new team member.

    Requires admin, editor or super_admin role.

    **JSON Fields:**
    - name, role: required
    - placeholder: 1-4 uppercase letters (optional, derived from name)
    - short_description, full_description, experience, education: optional
    - skills: list of strings (empty entries are dropped)
    - display_order: position (optional, default: last)
    - is_active: visibility (optional, default: true)
    """
    member = await team_member_service.create_team_member(team_member_data, current_actor["id"])
    return ApiResponse(data=member, message=get_message("team", "created"))


@router.put("/{team_member_id}", response_model=ApiResponse[TeamMemberResponse], summary="Update team member")
async def update_team_member(
    team_member_id: str,
    team_member_data: TeamMemberUpdate,
    current_actor: Dict = Depends(roster_editor_required),
    team_member_service: TeamMemberService = Depends(get_team_member_service),
):
    """
    Update a team member; any subset of fields may be sent.

    Requires admin, editor or super_admin role.
    """
    member = await team_member_service.update_team_member(team_member_id, team_member_data, current_actor["id"])
    return ApiResponse(data=member, message=get_message("team", "updated"))


@router.patch("/{team_member_id}/toggle-active", response_model=ApiResponse[TeamMemberResponse], summary="Toggle team member visibility")
async def toggle_active_status(
    team_member_id: str,
    current_actor: Dict = Depends(roster_editor_required),
    team_member_service: TeamMemberService = Depends(get_team_member_service),
):
    """
    Toggle active status of a team member. The display order is kept.

    Requires admin, editor or super_admin role.
    """
    member = await team_member_service.toggle_active_status(team_member_id, current_actor["id"])
    message_key = "activated" if member.is_active else "deactivated"
    return ApiResponse(data=member, message=get_message("team", message_key))


@router.delete("/{team_member_id}", response_model=ApiResponse[dict], summary="Delete team member")
async def delete_team_member(
    team_member_id: str,
    current_actor: Dict = Depends(roster_admin_required),
    team_member_service: TeamMemberService = Depends(get_team_member_service),
):
    """
    Delete a team member together with its CV. Remaining members are renumbered.

    Requires admin or super_admin role.
    """
    result = await team_member_service.delete_team_member(team_member_id, current_actor["id"])
    return ApiResponse(message=result.message)


@router.post("/{team_member_id}/cv", response_model=ApiResponse[CVAttachment], summary="Upload team member CV")
async def upload_team_member_cv(
    team_member_id: str,
    cv: UploadFile = File(None, description="CV file (PDF, max 10MB)"),
    current_actor: Dict = Depends(roster_editor_required),
    team_member_service: TeamMemberService = Depends(get_team_member_service),
):
    """
    Upload a CV, replacing the previous one.

    Requires admin, editor or super_admin role.

    **Form Data:**
    - cv: PDF file
    """
    if cv is None or not cv.filename:
        raise ValidationError(get_message("cv", "no_file"), code="NoFile")

    content = await cv.read()
    attachment = await team_member_service.upload_cv(
        team_member_id, cv.filename, cv.content_type, content, current_actor["id"]
    )
    return ApiResponse(data=attachment, message=get_message("cv", "uploaded"))


@router.get("/{team_member_id}/cv", summary="Download team member CV")
async def download_team_member_cv(
    team_member_id: str,
    team_member_service: TeamMemberService = Depends(get_team_member_service),
):
    """
    Redirect to the CV file of an active member.

    Public endpoint - no authentication required.
    """
    file_url, file_name = await team_member_service.get_cv_download(team_member_id)
    logger.info(f"CV download for {team_member_id} -> {file_name}")
    return RedirectResponse(url=file_url, status_code=status.HTTP_302_FOUND)


@router.delete("/{team_member_id}/cv", response_model=ApiResponse[dict], summary="Delete team member CV")
async def delete_team_member_cv(
    team_member_id: str,
    current_actor: Dict = Depends(roster_editor_required),
    team_member_service: TeamMemberService = Depends(get_team_member_service),
):
    """
    Delete a member's CV.

    Requires admin, editor or super_admin role.
    """
    result = await team_member_service.delete_cv(team_member_id, current_actor["id"])
    return ApiResponse(message=result.message)
