"""
Lead SLA API response models.
"""

from pydantic import BaseModel, Field


class LeadSlaResponse(BaseModel):
    lead_id: str = Field(..., description="Lead ID")
    progress_percentage: float = Field(..., description="Share of the SLA window used (0-100)")
    sla_met: bool = Field(..., description="Whether the SLA is met")
    ring: str = Field(..., description="Ring to display: first, second, third or none")
    elapsed_minutes: float | None = Field(None, description="Minutes since last inbound contact")


class OutreachConfirmationResponse(BaseModel):
    success: bool = Field(..., description="Whether outreach was recorded")
    lead_id: str = Field(..., description="Lead ID")
    message: str = Field(..., description="User-friendly message")
