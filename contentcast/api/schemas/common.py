"""
Common Pydantic schemas for API responses and requests.
Provides base classes and common data structures.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base model exposing camelCase JSON while keeping snake_case attributes."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class APIResponse(BaseModel):
    """Base API response model."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)


class SuccessResponse(APIResponse):
    """Success response model."""
    data: Optional[Any] = None


class ErrorResponse(BaseModel):
    """Error body returned by the exception handlers."""
    success: bool = False
    error: str
    message: str
    details: Optional[Dict[str, Any]] = None


class HealthCheckResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    timestamp: datetime = Field(default_factory=_utcnow)
    version: str
    services: Dict[str, str] = Field(default_factory=dict)


class AckResponse(CamelModel):
    """Plain ``{"success": true}`` acknowledgement."""
    success: bool = True


def create_success_response(data: Any = None, message: Optional[str] = None) -> SuccessResponse:
    """Create a success response."""
    return SuccessResponse(data=data, message=message)
