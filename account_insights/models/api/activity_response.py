"""
Activity summary API response models.
"""

from pydantic import BaseModel, Field


class ActivitySummaryResponse(BaseModel):
    """Response for an account activity summary request."""

    summary: str | None = Field(None, description="Generated activity summary")
    is_success: bool = Field(..., description="Whether the summary was generated")
    error_message: str | None = Field(None, description="User-facing error message on failure")
    status_code: int | None = Field(None, description="Upstream HTTP status, when a call was made")
    activity_count: int = Field(default=0, description="Number of activity records summarized")
