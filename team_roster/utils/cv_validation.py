"""CV file validation shared by the API and the client store."""

from typing import Optional

from team_roster.core.config import settings
from team_roster.core.exceptions import ValidationError
from team_roster.utils.messages import get_message

INVALID_TYPE = "InvalidType"
TOO_LARGE = "TooLarge"
EMPTY_FILE = "EmptyFile"


def validate_cv(media_type: Optional[str], size: int) -> None:
    """Raise ValidationError unless the file is a PDF of at most the size limit.

    The limit is inclusive: a file of exactly ``CV_MAX_UPLOAD_SIZE`` bytes passes.
    """
    if media_type != settings.CV_ALLOWED_MEDIA_TYPE:
        raise ValidationError(get_message("cv", "invalid_type"), code=INVALID_TYPE)
    if size > settings.CV_MAX_UPLOAD_SIZE:
        max_mb = settings.CV_MAX_UPLOAD_SIZE // (1024 * 1024)
        raise ValidationError(get_message("cv", "too_large", max_mb=max_mb), code=TOO_LARGE)
    if size == 0:
        raise ValidationError(get_message("cv", "empty_file"), code=EMPTY_FILE)
