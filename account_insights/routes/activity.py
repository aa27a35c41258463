"""
Account Activity Routes
HTTP endpoint for generating an AI summary of an account's recent activity.
"""

from fastapi import APIRouter, Query

from account_insights.infrastructure.observability.logging import get_logger
from account_insights.models.api.activity_response import ActivitySummaryResponse
from account_insights.services.activity_summary_service import generate_activity_summary

logger = get_logger(__name__)

router = APIRouter(prefix="/accounts", tags=["activity"])


@router.post("/{account_id}/activity-summary", response_model=ActivitySummaryResponse)
async def summarize_account_activity(
    account_id: str,
    limit: int | None = Query(
        default=None, ge=1, le=100, description="Maximum records of each kind (1-100)"
    ),
):
    """
    Summarize recent tasks, events and emails for an account.

    Failures are reported in the body (is_success=false) rather than as HTTP
    errors, so the caller can show the message and upstream status.
    """
    result = await generate_activity_summary(account_id, limit)

    if not result.is_success:
        logger.info(
            "Activity summary unsuccessful",
            account_id=account_id,
            status_code=result.status_code,
        )

    return ActivitySummaryResponse(
        summary=result.summary,
        is_success=result.is_success,
        error_message=result.error_message,
        status_code=result.status_code,
        activity_count=result.activity_count,
    )
