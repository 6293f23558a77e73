"""Error state schemas surfaced to presentation callers."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class ErrorType(str, Enum):
    """Types of errors a search can end with."""

    NETWORK_ERROR = "network_error"
    INTERNAL_ERROR = "internal_error"


class SearchError(BaseModel):
    """Standardized error state recorded by a search session."""

    error_type: ErrorType = Field(..., description="Category of error")
    message: str = Field(..., description="Human-readable error message")
    detail: str | None = Field(None, description="Additional error details or context")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="When error occurred"
    )
    retryable: bool = Field(
        False, description="Whether re-running the same search may succeed"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "error_type": "network_error",
                "message": "Employers could not be loaded",
                "detail": "Connection reset by peer",
                "timestamp": "2025-11-03T10:30:00Z",
                "retryable": True,
            }
        }
    }
