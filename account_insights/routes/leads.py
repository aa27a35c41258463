"""
Lead SLA Routes
"""

from fastapi import APIRouter, HTTPException, status

from account_insights.infrastructure.observability.logging import get_logger
from account_insights.models.api.lead_response import LeadSlaResponse, OutreachConfirmationResponse
from account_insights.services.lead_sla_service import (
    LeadNotFoundError,
    confirm_outreach,
    get_lead_sla,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/leads", tags=["leads"])


@router.get("/{lead_id}/sla", response_model=LeadSlaResponse)
async def get_sla_status(lead_id: str):
    """Get SLA progress and ring state for a lead."""
    try:
        sla = await get_lead_sla(lead_id)

        return LeadSlaResponse(
            lead_id=lead_id,
            progress_percentage=round(sla.progress_percentage, 2),
            sla_met=sla.sla_met,
            ring=sla.ring.value,
            elapsed_minutes=sla.elapsed_minutes,
        )

    except LeadNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error("Error calculating lead SLA", lead_id=lead_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to calculate lead SLA",
        )


@router.post("/{lead_id}/outreach", response_model=OutreachConfirmationResponse)
async def confirm_lead_outreach(lead_id: str):
    """Record that outreach was performed for a lead."""
    try:
        await confirm_outreach(lead_id)

        return OutreachConfirmationResponse(
            success=True,
            lead_id=lead_id,
            message="Outreach status updated successfully",
        )

    except LeadNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error("Error updating outreach status", lead_id=lead_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update outreach status",
        )
