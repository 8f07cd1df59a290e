"""In-memory mirror of the roster as last reported by the repository."""

import logging
from typing import Iterator, List, Optional

from team_roster.core.exceptions import RosterError
from team_roster.models.enums import RosterScope
from team_roster.roster.gateway import MemberGateway, RosterMember

logger = logging.getLogger(__name__)


class DirectoryCache:
    """Ordered list of members, replaced wholesale on every load.

    The cache never filters or reorders: ``members`` is exactly what the
    repository returned, which is ``display_order`` ascending.
    """

    def __init__(self, gateway: MemberGateway, scope: RosterScope = RosterScope.ADMIN):
        self.gateway = gateway
        self.scope = scope
        self.members: List[RosterMember] = []
        self.loading = False
        self.error: Optional[str] = None
        self._generation = 0
        self._closed = False

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[RosterMember]:
        return iter(self.members)

    @property
    def closed(self) -> bool:
        return self._closed

    async def load(self) -> bool:
        """Fetch the full roster and replace the cached list.

        Returns False on failure (``error`` set, ``members`` untouched) and
        when the result arrives after a newer load or after ``close()``; such
        late results are dropped.
        """
        if self._closed:
            logger.debug("Roster cache closed, skipping load")
            return False

        self._generation += 1
        generation = self._generation
        self.loading = True
        try:
            members = await self.gateway.fetch_roster(self.scope)
        except RosterError as e:
            if self._is_current(generation):
                self.error = e.message
                self.loading = False
            logger.warning(f"Roster load failed: {e.message}")
            return False

        if not self._is_current(generation):
            logger.info(f"Discarding stale roster load #{generation}")
            return False

        self.members = list(members)
        self.error = None
        self.loading = False
        logger.debug(f"Roster cache holds {len(self.members)} members")
        return True

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    def close(self) -> None:
        """End the cache's lifetime; in-flight loads will not write to it."""
        self._closed = True
        self.loading = False

    # ===== READ ACCESSORS =====

    def get(self, member_id: str) -> Optional[RosterMember]:
        for member in self.members:
            if member.id == member_id:
                return member
        return None

    def index_of(self, member_id: str) -> int:
        """Position of a member in the cached order, or -1."""
        for index, member in enumerate(self.members):
            if member.id == member_id:
                return index
        return -1

    def ids(self) -> List[str]:
        return [member.id for member in self.members]
