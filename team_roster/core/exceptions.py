"""Custom exceptions for the application."""

from typing import Optional

from fastapi import HTTPException, status
from ..utils.messages import get_message


class RosterError(HTTPException):
    """Base exception for roster operations.

    Carries a machine readable ``code`` next to the human readable ``detail``
    so both the HTTP layer and the client store can surface it.
    """

    default_status = status.HTTP_400_BAD_REQUEST
    default_code = "RosterError"

    def __init__(self, message: str, code: Optional[str] = None, status_code: Optional[int] = None):
        self.code = code or self.default_code
        super().__init__(
            status_code=status_code or self.default_status,
            detail=message
        )

    @property
    def message(self) -> str:
        return self.detail


class ValidationError(RosterError):
    """Exception raised for empty required fields and rejected files."""

    default_status = status.HTTP_400_BAD_REQUEST
    default_code = "ValidationError"


class NotFoundError(RosterError):
    """Exception raised when operating on a member or CV that does not exist."""

    default_status = status.HTTP_404_NOT_FOUND
    default_code = "NotFound"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        super().__init__(message or get_message("team", "not_found"), code)


class ConflictError(RosterError):
    """Exception raised when a reorder request does not match the roster."""

    default_status = status.HTTP_409_CONFLICT
    default_code = "Conflict"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        super().__init__(message or get_message("team", "reorder_mismatch"), code)


class NetworkError(RosterError):
    """Exception raised when the repository is unreachable or answers garbage."""

    default_status = status.HTTP_503_SERVICE_UNAVAILABLE
    default_code = "NetworkError"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        super().__init__(message or get_message("crud", "repository_unavailable"), code)


STATUS_TO_ERROR = {
    status.HTTP_400_BAD_REQUEST: ValidationError,
    status.HTTP_404_NOT_FOUND: NotFoundError,
    status.HTTP_409_CONFLICT: ConflictError,
    413: ValidationError,
    422: ValidationError,
}


def error_from_status(status_code: int, message: str, code: Optional[str] = None) -> RosterError:
    """Rebuild a roster exception from an HTTP status and envelope message."""
    error_class = STATUS_TO_ERROR.get(status_code)
    if error_class is not None:
        return error_class(message, code)
    if status_code >= 500:
        return NetworkError(message, code)
    return RosterError(message, code, status_code=status_code)
