"""Mutation coordinator: one write, then a full roster refresh."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from team_roster.core.exceptions import RosterError
from team_roster.roster.directory_cache import DirectoryCache
from team_roster.roster.gateway import MemberGateway
from team_roster.schemas.shared import OperationResult
from team_roster.schemas.team_member import TeamMemberCreate, TeamMemberUpdate
from team_roster.utils.messages import get_message

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def first_error_message(error: PydanticValidationError) -> str:
    """Readable message for the first failing field."""
    errors = error.errors()
    if not errors:
        return get_message("validation", "invalid_data", detail="")
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "").removeprefix("Value error, ")
    return f"{field}: {message}" if field else message


class MutationCoordinator:
    """Runs roster writes one at a time and re-synchronizes the cache after each.

    Writes are serialized by a single-flight lock: a command issued while
    another is in flight waits for it to finish (write and refresh) before
    starting. Failures never touch the cache.
    """

    def __init__(self, gateway: MemberGateway, cache: DirectoryCache):
        self.gateway = gateway
        self.cache = cache
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    async def execute(
        self,
        action: str,
        write: Callable[[], Awaitable[Any]],
        success_message: Optional[str] = None,
    ) -> OperationResult:
        """Run ``write`` exclusively; refresh the cache only if it succeeded."""
        async with self._lock:
            try:
                data = await write()
            except RosterError as e:
                logger.warning(f"{action} failed: {e.message}")
                return OperationResult.failed(e.message, e.code)

            await self.cache.load()
            logger.info(f"{action} succeeded")
            return OperationResult.ok(success_message, data)

    @staticmethod
    def _coerce(model: Type[PayloadT], data: Union[PayloadT, Mapping[str, Any]]) -> PayloadT:
        if isinstance(data, model):
            return data
        return model.model_validate(data)

    # ===== COMMANDS =====

    async def create(self, data: Union[TeamMemberCreate, Mapping[str, Any]]) -> OperationResult:
        """Create a member; without display_order it goes last."""
        try:
            payload = self._coerce(TeamMemberCreate, data)
        except PydanticValidationError as e:
            return OperationResult.failed(first_error_message(e), "ValidationError")

        return await self.execute(
            f"create {payload.name}",
            lambda: self.gateway.create(payload),
            get_message("team", "created"),
        )

    async def update(self, member_id: str, data: Union[TeamMemberUpdate, Mapping[str, Any]]) -> OperationResult:
        """Replace any subset of a member's mutable fields."""
        try:
            payload = self._coerce(TeamMemberUpdate, data)
        except PydanticValidationError as e:
            return OperationResult.failed(first_error_message(e), "ValidationError")

        return await self.execute(
            f"update {member_id}",
            lambda: self.gateway.update(member_id, payload),
            get_message("team", "updated"),
        )

    async def delete(self, member_id: str) -> OperationResult:
        return await self.execute(
            f"delete {member_id}",
            lambda: self.gateway.delete(member_id),
            get_message("team", "deleted"),
        )

    async def toggle_active(self, member_id: str) -> OperationResult:
        """Flip ``is_active``; the member keeps its display order."""
        async def write():
            member = self.cache.get(member_id)
            if member is None or not hasattr(member, "is_active"):
                member = await self.gateway.fetch_one(member_id)
            return await self.gateway.update(member_id, TeamMemberUpdate(is_active=not member.is_active))

        return await self.execute(f"toggle {member_id}", write, get_message("team", "updated"))

    async def get_member(self, member_id: str) -> OperationResult:
        """Fetch one member for editing; the cache is not involved."""
        try:
            member = await self.gateway.fetch_one(member_id)
        except RosterError as e:
            return OperationResult.failed(e.message, e.code)
        return OperationResult.ok(data=member)
