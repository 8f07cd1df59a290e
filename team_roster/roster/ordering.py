"""Order reconciler: the roster order is always rewritten as a whole."""

import logging
from typing import List, Optional, Sequence, Union

from team_roster.roster.coordinator import MutationCoordinator
from team_roster.roster.directory_cache import DirectoryCache
from team_roster.roster.gateway import RosterMember
from team_roster.schemas.shared import OperationResult
from team_roster.utils.messages import get_message

logger = logging.getLogger(__name__)

MemberRef = Union[str, RosterMember]


def _member_id(member: MemberRef) -> str:
    return member if isinstance(member, str) else member.id


def swapped_ids(ids: Sequence[str], member_id: str, offset: int) -> Optional[List[str]]:
    """Return ``ids`` with ``member_id`` swapped with the neighbour at ``offset``.

    None when the member is unknown or the neighbour would fall off either end.
    """
    try:
        index = list(ids).index(member_id)
    except ValueError:
        return None
    target = index + offset
    if target < 0 or target >= len(ids):
        return None
    reordered = list(ids)
    reordered[index], reordered[target] = reordered[target], reordered[index]
    return reordered


class OrderReconciler:
    """Reorders the roster from a full ordered list of member ids.

    ``display_order`` becomes ``position + 1``; the repository applies the
    whole list in one transaction and rejects any list that is not a
    permutation of the roster.
    """

    def __init__(self, coordinator: MutationCoordinator, cache: DirectoryCache):
        self.coordinator = coordinator
        self.cache = cache

    async def reorder(self, ordered_ids: Sequence[str]) -> OperationResult:
        ordered_ids = list(ordered_ids)
        return await self.coordinator.execute(
            f"reorder {len(ordered_ids)} members",
            lambda: self.coordinator.gateway.reorder(ordered_ids),
            get_message("team", "reordered"),
        )

    def can_move_up(self, member: MemberRef) -> bool:
        return self.cache.index_of(_member_id(member)) > 0

    def can_move_down(self, member: MemberRef) -> bool:
        index = self.cache.index_of(_member_id(member))
        return 0 <= index < len(self.cache) - 1

    async def move_up(self, member: MemberRef) -> OperationResult:
        return await self._move(_member_id(member), -1)

    async def move_down(self, member: MemberRef) -> OperationResult:
        return await self._move(_member_id(member), 1)

    async def _move(self, member_id: str, offset: int) -> OperationResult:
        if swapped_ids(self.cache.ids(), member_id, offset) is None:
            logger.debug(f"Move of {member_id} by {offset} is a no-op")
            return OperationResult.ok()

        async def write():
            # Recomputed under the lock from the freshest snapshot
            ordered_ids = swapped_ids(self.cache.ids(), member_id, offset)
            if ordered_ids is not None:
                await self.coordinator.gateway.reorder(ordered_ids)

        return await self.coordinator.execute(
            f"move {member_id} by {offset}", write, get_message("team", "reordered")
        )
