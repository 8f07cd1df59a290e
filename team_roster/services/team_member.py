"""Team member service for business logic."""

import logging
from typing import List, Optional, Sequence, Tuple

from team_roster.core.exceptions import ConflictError, NotFoundError
from team_roster.models.base import utc_now
from team_roster.models.team_member import TeamMember
from team_roster.repositories.team_member import TeamMemberRepository
from team_roster.schemas.shared import MessageResponse
from team_roster.schemas.team_member import (
    CVAttachment, TeamMemberCreate, TeamMemberPublic, TeamMemberResponse,
    TeamMemberUpdate, TeamStatistics
)
from team_roster.utils.cv_storage import CVStorage
from team_roster.utils.cv_validation import validate_cv
from team_roster.utils.messages import get_message

logger = logging.getLogger(__name__)

# Fields where an explicit null in an update means "leave unchanged"
NON_NULLABLE_FIELDS = {"name", "role", "placeholder", "skills", "display_order", "is_active"}


class TeamMemberService:
    """Team member service: the durable side of the roster."""

    def __init__(self, team_member_repo: TeamMemberRepository, cv_storage: Optional[CVStorage] = None):
        self.team_member_repo = team_member_repo
        self.cv_storage = cv_storage or CVStorage()

    async def _get_or_404(self, team_member_id: str) -> TeamMember:
        team_member = await self.team_member_repo.get_by_id(team_member_id)
        if not team_member:
            logger.warning(f"Team member {team_member_id} not found")
            raise NotFoundError()
        return team_member

    # ===== READS =====

    async def get_team_members(self) -> List[TeamMemberResponse]:
        """Get the whole roster, active and inactive, for administrators."""
        team_members = await self.team_member_repo.get_all_members()
        logger.info(get_message("team", "fetched", count=len(team_members)))
        return [TeamMemberResponse.from_team_member_model(team_member) for team_member in team_members]

    async def get_public_team_members(self) -> List[TeamMemberPublic]:
        """Get active team members in their reduced public form."""
        team_members = await self.team_member_repo.get_all_members(active_only=True)
        return [TeamMemberPublic.from_team_member_model(team_member) for team_member in team_members]

    async def get_team_member(self, team_member_id: str) -> TeamMemberResponse:
        """Get team member by ID."""
        team_member = await self._get_or_404(team_member_id)
        return TeamMemberResponse.from_team_member_model(team_member)

    async def get_statistics(self) -> TeamStatistics:
        """Get roster counts."""
        team_members = await self.team_member_repo.get_all_members()
        active = sum(1 for team_member in team_members if team_member.is_active)
        return TeamStatistics(
            total_members=len(team_members),
            active_members=active,
            inactive_members=len(team_members) - active,
            members_with_cv=sum(1 for team_member in team_members if team_member.has_cv)
        )

    # ===== WRITES =====

    async def create_team_member(self, team_member_data: TeamMemberCreate, created_by: Optional[str] = None) -> TeamMemberResponse:
        """Create a new team member."""
        team_member = await self.team_member_repo.create(team_member_data, created_by)
        logger.info(f"Actor {created_by} created team member {team_member.id} ({team_member.name}) at position {team_member.display_order}")
        return TeamMemberResponse.from_team_member_model(team_member)

    async def update_team_member(self, team_member_id: str, team_member_data: TeamMemberUpdate, updated_by: Optional[str] = None) -> TeamMemberResponse:
        """Update team member information."""
        team_member = await self._get_or_404(team_member_id)

        update_data = {
            key: value
            for key, value in team_member_data.model_dump(exclude_unset=True).items()
            if value is not None or key not in NON_NULLABLE_FIELDS
        }
        updated_team_member = await self.team_member_repo.update(team_member, update_data, updated_by)
        logger.info(f"Actor {updated_by} updated team member {team_member_id}: {sorted(update_data)}")
        return TeamMemberResponse.from_team_member_model(updated_team_member)

    async def toggle_active_status(self, team_member_id: str, updated_by: Optional[str] = None) -> TeamMemberResponse:
        """Toggle active status of a team member without touching its position."""
        team_member = await self._get_or_404(team_member_id)
        updated_team_member = await self.team_member_repo.update(
            team_member, {"is_active": not team_member.is_active}, updated_by
        )
        logger.info(f"Actor {updated_by} set team member {team_member_id} active={updated_team_member.is_active}")
        return TeamMemberResponse.from_team_member_model(updated_team_member)

    async def delete_team_member(self, team_member_id: str, deleted_by: Optional[str] = None) -> MessageResponse:
        """Delete a team member, renumber the roster and discard its CV file."""
        team_member = await self._get_or_404(team_member_id)
        cv_key = team_member.cv_storage_key
        name = team_member.name

        await self.team_member_repo.delete(team_member)

        if cv_key:
            self._discard_cv_file(cv_key)

        logger.info(f"Actor {deleted_by} deleted team member {team_member_id} ({name})")
        return MessageResponse(message=get_message("team", "deleted"))

    async def reorder_team_members(self, ordered_ids: Sequence[str], updated_by: Optional[str] = None) -> MessageResponse:
        """Apply a full ordering of the roster.

        ``ordered_ids`` must name every member exactly once; otherwise a
        ConflictError is raised and nothing is written.
        """
        current_ids = await self.team_member_repo.get_all_ids()
        if len(ordered_ids) != len(current_ids) or set(ordered_ids) != set(current_ids):
            logger.warning(
                f"Reorder rejected: {len(ordered_ids)} ids given for a roster of {len(current_ids)}"
            )
            raise ConflictError()

        await self.team_member_repo.reorder(ordered_ids, updated_by)
        logger.info(f"Actor {updated_by} reordered {len(ordered_ids)} team members")
        return MessageResponse(message=get_message("team", "reordered"))

    # ===== CV ATTACHMENT =====

    async def upload_cv(
        self,
        team_member_id: str,
        file_name: str,
        media_type: Optional[str],
        content: bytes,
        updated_by: Optional[str] = None
    ) -> CVAttachment:
        """Store a new CV for a member, replacing any previous one.

        The new file is written and recorded first; the previous file is
        removed only once the database points at the new one.
        """
        validate_cv(media_type, len(content))
        team_member = await self._get_or_404(team_member_id)
        previous_key = team_member.cv_storage_key

        stored = self.cv_storage.save(team_member.name, content)
        try:
            team_member.attach_cv(
                file_name=file_name,
                file_url=stored.url,
                file_size=len(content),
                storage_key=stored.key,
                uploaded_at=utc_now()
            )
            team_member = await self.team_member_repo.save(team_member, updated_by)
        except Exception:
            self.cv_storage.delete(stored.key)
            raise

        if previous_key and previous_key != stored.key:
            self._discard_cv_file(previous_key)

        logger.info(f"Actor {updated_by} uploaded CV for team member {team_member_id} ({len(content)} bytes)")
        return CVAttachment.from_team_member_model(team_member)

    async def delete_cv(self, team_member_id: str, updated_by: Optional[str] = None) -> MessageResponse:
        """Remove a member's CV file and metadata."""
        team_member = await self._get_or_404(team_member_id)
        if not team_member.has_cv:
            raise NotFoundError(get_message("cv", "not_found"), code="CVNotFound")

        cv_key = team_member.cv_storage_key
        team_member.detach_cv()
        await self.team_member_repo.save(team_member, updated_by)

        if cv_key:
            self._discard_cv_file(cv_key)

        logger.info(f"Actor {updated_by} deleted CV of team member {team_member_id}")
        return MessageResponse(message=get_message("cv", "deleted"))

    async def get_cv_download(self, team_member_id: str) -> Tuple[str, str]:
        """Resolve the public download of a CV to (file_url, file_name).

        Only active members expose their CV publicly.
        """
        team_member = await self._get_or_404(team_member_id)
        if not team_member.is_active:
            raise NotFoundError(get_message("cv", "not_available"), code="CVNotAvailable")
        if not team_member.has_cv:
            raise NotFoundError(get_message("cv", "not_found"), code="CVNotFound")
        return team_member.cv_file_url, team_member.cv_file_name or f"CV_{team_member.name}.pdf"

    def _discard_cv_file(self, key: str) -> None:
        """Delete a CV binary whose metadata is already gone.

        The database is the source of truth at this point, so a storage
        failure leaves an orphaned file and is logged rather than raised.
        """
        try:
            self.cv_storage.delete(key)
        except OSError as e:
            logger.error(f"Orphaned CV file {key}: {e}")
