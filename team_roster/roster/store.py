"""Roster store: the state object behind the team page and the admin screen."""

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from team_roster.models.enums import RosterScope, StatusFilter
from team_roster.roster.coordinator import MutationCoordinator
from team_roster.roster.cv_attachments import CVAttachmentManager
from team_roster.roster.directory_cache import DirectoryCache
from team_roster.roster.gateway import MemberGateway, RosterMember
from team_roster.roster.ordering import MemberRef, OrderReconciler
from team_roster.roster.projection import filter_members, roster_statistics
from team_roster.schemas.cv_file import CVFile
from team_roster.schemas.shared import OperationResult
from team_roster.schemas.team_member import TeamMemberCreate, TeamMemberUpdate, TeamStatistics

logger = logging.getLogger(__name__)


class RosterStore:
    """Cached roster plus every command that changes it.

    Each command performs one repository write and, if it succeeds, reloads
    the whole roster before returning. Commands never raise on repository
    errors; they return an ``OperationResult`` and leave the cache as it was.

    Use as an async context manager, or call ``close()`` when the view goes
    away so that in-flight loads are dropped.
    """

    def __init__(
        self,
        gateway: MemberGateway,
        scope: RosterScope = RosterScope.ADMIN,
        api_base_url: Optional[str] = None,
    ):
        self.gateway = gateway
        self.cache = DirectoryCache(gateway, scope)
        self.coordinator = MutationCoordinator(gateway, self.cache)
        self.ordering = OrderReconciler(self.coordinator, self.cache)
        self.cv = CVAttachmentManager(gateway, self.coordinator, api_base_url)

    async def __aenter__(self) -> "RosterStore":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.cache.close()
        logger.debug("Roster store closed")

    # ===== STATE =====

    @property
    def members(self) -> List[RosterMember]:
        return self.cache.members

    @property
    def loading(self) -> bool:
        return self.cache.loading

    @property
    def error(self) -> Optional[str]:
        return self.cache.error

    @property
    def uploading(self) -> bool:
        return self.cv.uploading

    async def load(self) -> bool:
        return await self.cache.load()

    # ===== MEMBER COMMANDS =====

    async def get_member(self, member_id: str) -> OperationResult:
        return await self.coordinator.get_member(member_id)

    async def create(self, data: Union[TeamMemberCreate, Mapping[str, Any]]) -> OperationResult:
        return await self.coordinator.create(data)

    async def update(self, member_id: str, data: Union[TeamMemberUpdate, Mapping[str, Any]]) -> OperationResult:
        return await self.coordinator.update(member_id, data)

    async def delete(self, member_id: str) -> OperationResult:
        return await self.coordinator.delete(member_id)

    async def toggle_active(self, member_id: str) -> OperationResult:
        return await self.coordinator.toggle_active(member_id)

    # ===== ORDERING =====

    async def reorder(self, ordered_ids: Sequence[str]) -> OperationResult:
        return await self.ordering.reorder(ordered_ids)

    async def move_up(self, member: MemberRef) -> OperationResult:
        return await self.ordering.move_up(member)

    async def move_down(self, member: MemberRef) -> OperationResult:
        return await self.ordering.move_down(member)

    def can_move_up(self, member: MemberRef) -> bool:
        return self.ordering.can_move_up(member)

    def can_move_down(self, member: MemberRef) -> bool:
        return self.ordering.can_move_down(member)

    # ===== CV =====

    async def upload_cv(self, member_id: str, file: CVFile) -> OperationResult:
        return await self.cv.upload(member_id, file)

    async def delete_cv(self, member_id: str) -> OperationResult:
        return await self.cv.delete(member_id)

    def cv_download_url(self, member_id: str) -> str:
        return self.cv.download_url(member_id)

    # ===== PROJECTION =====

    def filter(self, search_term: str = "", status_filter: Union[StatusFilter, str] = StatusFilter.ALL) -> List[RosterMember]:
        return filter_members(self.cache.members, search_term, status_filter)

    def statistics(self) -> TeamStatistics:
        return roster_statistics(self.cache.members)
