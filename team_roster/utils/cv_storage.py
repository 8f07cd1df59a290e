"""CV binary storage on the local filesystem."""

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from team_roster.core.config import settings
from team_roster.core.exceptions import NetworkError
from team_roster.utils.messages import get_message

logger = logging.getLogger(__name__)


@dataclass
class StoredFile:
    """Where a stored CV lives: an internal key and its public URL."""
    key: str
    url: str


def slugify(value: str) -> str:
    """Lower-case, dash separated file stem: "Mario Rossi" -> "mario-rossi"."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or "member"


class CVStorage:
    """Save CV files under the uploads directory and serve them by URL."""

    def __init__(self, upload_base_path: Optional[str] = None, url_prefix: Optional[str] = None, subfolder: Optional[str] = None):
        """Initialize with base upload path."""
        self.upload_base_path = Path(upload_base_path or settings.UPLOADS_PATH)
        self.url_prefix = (url_prefix or settings.STATIC_URL_PREFIX).rstrip("/")
        self.subfolder = subfolder or settings.CV_SUBFOLDER

    def save(self, member_name: str, content: bytes) -> StoredFile:
        """
        Write a CV and return its storage key and URL.

        Args:
            member_name: Used to build a readable file name
            content: PDF bytes, already validated

        Returns:
            StoredFile pointing at the new file
        """
        upload_dir = self.upload_base_path / self.subfolder

        # Timestamp suffix keeps replacements from overwriting the previous file
        unique_filename = f"{slugify(member_name)}-{time.time_ns()}.pdf"
        file_path = upload_dir / unique_filename
        key = f"{self.subfolder}/{unique_filename}"

        try:
            upload_dir.mkdir(parents=True, exist_ok=True)
            with open(file_path, "wb") as f:
                f.write(content)
        except OSError as e:
            # Clean up file if save fails
            if file_path.exists():
                file_path.unlink()
            logger.error(f"Failed to store CV {key}: {e}")
            raise NetworkError(get_message("cv", "storage_failed", error=str(e)), code="StorageError")

        logger.info(f"Stored CV {key} ({len(content)} bytes)")
        return StoredFile(key=key, url=f"{self.url_prefix}/{key}")

    def delete(self, key: str) -> bool:
        """Remove a stored CV; returns False when it was already gone."""
        file_path = self.upload_base_path / key
        if not file_path.exists():
            logger.warning(f"CV {key} already missing from storage")
            return False
        file_path.unlink()
        logger.info(f"Deleted CV {key}")
        return True

    def exists(self, key: str) -> bool:
        return (self.upload_base_path / key).exists()
