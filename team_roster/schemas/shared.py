"""Shared schemas for API responses."""

from typing import Any, Generic, List, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar('T')


class ApiResponse(BaseModel, Generic[T]):
    """Response envelope used by every roster endpoint."""
    
    success: bool = Field(default=True, description="Operation success status")
    data: Optional[T] = Field(default=None, description="Response payload")
    message: Optional[str] = Field(default=None, description="Message to display")
    code: Optional[str] = Field(default=None, description="Error code when success is false")


class MessageResponse(BaseModel):
    """Standard message response."""
    
    message: str = Field(..., description="Response message")
    success: bool = Field(default=True, description="Operation success status")
    data: Optional[dict] = Field(default=None, description="Additional response data")


class OperationResult(BaseModel):
    """Outcome of a roster store command: a success flag plus a message."""
    
    success: bool
    message: Optional[str] = None
    code: Optional[str] = None
    data: Optional[Any] = None
    
    @classmethod
    def ok(cls, message: Optional[str] = None, data: Any = None) -> "OperationResult":
        return cls(success=True, message=message, data=data)
    
    @classmethod
    def failed(cls, message: str, code: Optional[str] = None) -> "OperationResult":
        return cls(success=False, message=message, code=code)


class ValidationErrorDetail(BaseModel):
    """Validation error detail."""
    
    field: str = Field(..., description="Field name with error")
    message: str = Field(..., description="Error message")
    type: str = Field(..., description="Error type")


class ValidationErrorResponse(ApiResponse[List[ValidationErrorDetail]]):
    """Validation error response."""
    
    success: bool = False
