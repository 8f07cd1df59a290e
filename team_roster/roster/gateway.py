"""Gateways through which the roster store reaches the member repository.

A gateway performs exactly one repository operation per call and raises a
``RosterError`` subclass on failure. ``ServiceGateway`` runs in-process
against the database; ``HttpGateway`` talks to the team API.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Protocol, Sequence, Union

import httpx
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from team_roster.core.config import settings
from team_roster.core.exceptions import NetworkError, error_from_status
from team_roster.models.enums import RosterScope
from team_roster.repositories.team_member import TeamMemberRepository
from team_roster.schemas.cv_file import CVFile
from team_roster.schemas.team_member import (
    CVAttachment, TeamMemberCreate, TeamMemberPublic, TeamMemberResponse, TeamMemberUpdate
)
from team_roster.services.team_member import TeamMemberService
from team_roster.utils.cv_storage import CVStorage
from team_roster.utils.messages import get_message

logger = logging.getLogger(__name__)

RosterMember = Union[TeamMemberResponse, TeamMemberPublic]


class MemberGateway(Protocol):
    """Repository contract consumed by the roster store."""

    async def fetch_roster(self, scope: RosterScope = RosterScope.ADMIN) -> List[RosterMember]: ...

    async def fetch_one(self, member_id: str) -> TeamMemberResponse: ...

    async def create(self, data: TeamMemberCreate) -> TeamMemberResponse: ...

    async def update(self, member_id: str, data: TeamMemberUpdate) -> TeamMemberResponse: ...

    async def delete(self, member_id: str) -> None: ...

    async def upload_cv(self, member_id: str, file: CVFile) -> CVAttachment: ...

    async def delete_cv(self, member_id: str) -> None: ...

    async def reorder(self, ordered_ids: Sequence[str]) -> None: ...


class ServiceGateway:
    """In-process gateway: one database session per operation."""

    def __init__(
        self,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
        cv_storage: Optional[CVStorage] = None,
        actor_id: Optional[str] = None,
    ):
        if session_factory is None:
            from team_roster.core.database import async_session
            session_factory = async_session
        self.session_factory = session_factory
        self.cv_storage = cv_storage or CVStorage()
        self.actor_id = actor_id

    @asynccontextmanager
    async def _service(self) -> AsyncIterator[TeamMemberService]:
        async with self.session_factory() as session:
            try:
                yield TeamMemberService(TeamMemberRepository(session), self.cv_storage)
            except SQLAlchemyError as e:
                logger.error(f"Database error in roster gateway: {e}")
                raise NetworkError() from e
            except OSError as e:
                logger.error(f"Storage error in roster gateway: {e}")
                raise NetworkError(get_message("cv", "storage_failed", error=str(e)), code="StorageError") from e

    async def fetch_roster(self, scope: RosterScope = RosterScope.ADMIN) -> List[RosterMember]:
        async with self._service() as service:
            if scope == RosterScope.PUBLIC:
                return await service.get_public_team_members()
            return await service.get_team_members()

    async def fetch_one(self, member_id: str) -> TeamMemberResponse:
        async with self._service() as service:
            return await service.get_team_member(member_id)

    async def create(self, data: TeamMemberCreate) -> TeamMemberResponse:
        async with self._service() as service:
            return await service.create_team_member(data, self.actor_id)

    async def update(self, member_id: str, data: TeamMemberUpdate) -> TeamMemberResponse:
        async with self._service() as service:
            return await service.update_team_member(member_id, data, self.actor_id)

    async def delete(self, member_id: str) -> None:
        async with self._service() as service:
            await service.delete_team_member(member_id, self.actor_id)

    async def upload_cv(self, member_id: str, file: CVFile) -> CVAttachment:
        async with self._service() as service:
            return await service.upload_cv(
                member_id, file.file_name, file.media_type, file.content, self.actor_id
            )

    async def delete_cv(self, member_id: str) -> None:
        async with self._service() as service:
            await service.delete_cv(member_id, self.actor_id)

    async def reorder(self, ordered_ids: Sequence[str]) -> None:
        async with self._service() as service:
            await service.reorder_team_members(list(ordered_ids), self.actor_id)


class HttpGateway:
    """Gateway over the team API, reading the ``{success, data, message}`` envelope."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.PUBLIC_API_BASE_URL, timeout=timeout
        )
        self._headers: Dict[str, str] = {"Authorization": f"Bearer {token}"} if token else {}

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, path, headers=self._headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise NetworkError() from e

        try:
            payload = response.json()
        except ValueError as e:
            raise NetworkError(get_message("crud", "malformed_response")) from e
        if not isinstance(payload, dict) or "success" not in payload:
            raise NetworkError(get_message("crud", "malformed_response"))

        if response.is_error or not payload["success"]:
            message = payload.get("message") or get_message("crud", "operation_failed")
            logger.warning(f"{method} {path} -> {response.status_code}: {message}")
            raise error_from_status(response.status_code, message, payload.get("code"))

        return payload.get("data")

    @staticmethod
    def _parse(model, data: Any):
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise NetworkError(get_message("crud", "malformed_response")) from e

    async def fetch_roster(self, scope: RosterScope = RosterScope.ADMIN) -> List[RosterMember]:
        if scope == RosterScope.PUBLIC:
            data = await self._request("GET", "/team/public")
            model = TeamMemberPublic
        else:
            data = await self._request("GET", "/team/")
            model = TeamMemberResponse
        if not isinstance(data, list):
            raise NetworkError(get_message("crud", "malformed_response"))
        return [self._parse(model, item) for item in data]

    async def fetch_one(self, member_id: str) -> TeamMemberResponse:
        return self._parse(TeamMemberResponse, await self._request("GET", f"/team/{member_id}"))

    async def create(self, data: TeamMemberCreate) -> TeamMemberResponse:
        body = data.model_dump(exclude_none=True)
        return self._parse(TeamMemberResponse, await self._request("POST", "/team/", json=body))

    async def update(self, member_id: str, data: TeamMemberUpdate) -> TeamMemberResponse:
        body = data.model_dump(exclude_unset=True)
        return self._parse(TeamMemberResponse, await self._request("PUT", f"/team/{member_id}", json=body))

    async def delete(self, member_id: str) -> None:
        await self._request("DELETE", f"/team/{member_id}")

    async def upload_cv(self, member_id: str, file: CVFile) -> CVAttachment:
        files = {"cv": (file.file_name, file.content, file.media_type)}
        return self._parse(CVAttachment, await self._request("POST", f"/team/{member_id}/cv", files=files))

    async def delete_cv(self, member_id: str) -> None:
        await self._request("DELETE", f"/team/{member_id}/cv")

    async def reorder(self, ordered_ids: Sequence[str]) -> None:
        await self._request("PUT", "/team/reorder", json={"member_ids": list(ordered_ids)})
