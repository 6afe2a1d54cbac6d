from pydantic import BaseModel, Field
from typing import Generic, TypeVar, Optional, Any, Dict

DataType = TypeVar("DataType")

class APIResponse(BaseModel, Generic[DataType]):
    """Envelope for every successful response."""
    message: str = Field(..., description="What happened, e.g. 'Bitcoin retrieved successfully'.")
    data: Optional[DataType] = Field(None, description="The record, listing or stats payload.")

class ErrorDetail(BaseModel):
    code: str = Field(..., description="Machine-readable code such as NOT_FOUND or STORE_ERROR")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Extra context, never includes stack traces")

class ErrorResponse(BaseModel):
    """Envelope for every error response."""
    error: ErrorDetail
    timestamp: str = Field(..., description="ISO 8601 timestamp of error")
    path: str = Field(..., description="Request path that caused the error")
    request_id: Optional[str] = Field(None, description="Matches the X-Request-ID response header")
