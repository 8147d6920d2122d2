"""
Common Pydantic schemas used across the API.
"""

from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar, Optional, Dict, Any

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer


T = TypeVar("T")


class ErrorDetail(BaseModel):
    """Error detail for API responses."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Additional error details"
    )


class APIResponse(BaseModel, Generic[T]):
    """
    Standard API response wrapper.

    All API endpoints should return responses in this format.
    """

    success: bool = Field(..., description="Whether the request was successful")
    message: Optional[str] = Field(default=None, description="Human-readable summary")
    data: Optional[T] = Field(default=None, description="Response data")
    error: Optional[ErrorDetail] = Field(default=None, description="Error details if failed")

    @classmethod
    def ok(cls, data: T, message: Optional[str] = None) -> "APIResponse[T]":
        """Create a successful response."""
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ) -> "APIResponse[None]":
        """Create a failed response."""
        return cls(
            success=False,
            error=ErrorDetail(code=code, message=message, details=details)
        )

    @model_serializer(mode="wrap")
    def _omit_unused_keys(self, handler: SerializerFunctionWrapHandler):
        # Success bodies carry no "error"; failure bodies carry no "message"/"data"
        data = handler(self)
        if self.success:
            data.pop("error", None)
        else:
            data.pop("message", None)
            data.pop("data", None)
        return data


class HealthStatus(str, Enum):
    """Health check status enum."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class ComponentHealth(BaseModel):
    """Health status of a single component."""

    status: HealthStatus
    error: Optional[str] = None


class HealthCheckResponse(BaseModel):
    """Basic health check response."""

    status: HealthStatus
    timestamp: datetime = Field(default_factory=lambda: datetime.now())


class ReadinessResponse(BaseModel):
    """Readiness check response with component status."""

    status: HealthStatus
    timestamp: datetime = Field(default_factory=lambda: datetime.now())
    version: str
    environment: str
    components: Dict[str, ComponentHealth] = Field(
        default_factory=dict,
        description="Health status of each component"
    )
