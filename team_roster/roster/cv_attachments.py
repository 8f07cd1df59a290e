"""CV attachment manager for the roster store."""

import logging
from typing import Awaitable, Callable, Optional

from team_roster.core.config import settings
from team_roster.core.exceptions import ValidationError
from team_roster.roster.coordinator import MutationCoordinator
from team_roster.roster.gateway import MemberGateway
from team_roster.schemas.cv_file import CVFile
from team_roster.schemas.shared import OperationResult
from team_roster.utils.cv_validation import validate_cv
from team_roster.utils.messages import get_message

logger = logging.getLogger(__name__)


class CVAttachmentManager:
    """Validates, uploads and removes member CVs.

    Files are checked locally before anything is sent; uploads and deletes
    go through the mutation coordinator so the roster is refreshed after
    each one.
    """

    def __init__(
        self,
        gateway: MemberGateway,
        coordinator: MutationCoordinator,
        api_base_url: Optional[str] = None,
    ):
        self.gateway = gateway
        self.coordinator = coordinator
        self.api_base_url = (api_base_url or settings.PUBLIC_API_BASE_URL).rstrip("/")
        self.uploading = False

    @staticmethod
    def validate(file: CVFile) -> None:
        """Raise ValidationError unless ``file`` is an acceptable CV."""
        validate_cv(file.media_type, file.size)

    async def upload(self, member_id: str, file: CVFile) -> OperationResult:
        try:
            self.validate(file)
        except ValidationError as e:
            logger.info(f"CV for {member_id} rejected locally: {e.code}")
            return OperationResult.failed(e.message, e.code)

        return await self._run(
            f"upload CV for {member_id} ({file.size} bytes)",
            lambda: self.gateway.upload_cv(member_id, file),
            get_message("cv", "uploaded"),
        )

    async def delete(self, member_id: str) -> OperationResult:
        return await self._run(
            f"delete CV of {member_id}",
            lambda: self.gateway.delete_cv(member_id),
            get_message("cv", "deleted"),
        )

    async def _run(self, action: str, write: Callable[[], Awaitable], message: str) -> OperationResult:
        self.uploading = True
        try:
            return await self.coordinator.execute(action, write, message)
        finally:
            self.uploading = False

    def download_url(self, member_id: str) -> str:
        """Public download link for a member's CV."""
        return f"{self.api_base_url}/team/{member_id}/cv"
