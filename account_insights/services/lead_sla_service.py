"""
Lead SLA Service
Tracks how much of the first-response window has been used for a lead.

The window starts at the lead's last inbound contact. It ends either at the
first qualified activity (met when that came within the window) or is still
running against the current time.
"""

from datetime import UTC, datetime

from account_insights.config import settings
from account_insights.infrastructure.observability.logging import get_logger
from account_insights.models.domain.lead_domain import LeadSlaSnapshot, SlaRing, SlaStatus
from account_insights.repositories.lead_repository import LeadRepository

logger = get_logger(__name__)

SECOND_RING_THRESHOLD = 75.0


class LeadNotFoundError(Exception):
    def __init__(self, lead_id: str):
        super().__init__(f"Lead {lead_id} not found")
        self.lead_id = lead_id


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def ring_for(progress: float, sla_met: bool) -> SlaRing:
    if progress >= 100 and not sla_met:
        return SlaRing.THIRD
    if SECOND_RING_THRESHOLD <= progress < 100:
        return SlaRing.SECOND
    if 0 <= progress < SECOND_RING_THRESHOLD and not sla_met:
        return SlaRing.FIRST
    return SlaRing.NONE


def calculate_sla(
    snapshot: LeadSlaSnapshot,
    now: datetime | None = None,
    window_minutes: int | None = None,
) -> SlaStatus:
    """Compute progress through the SLA window and which ring to show."""
    window = settings.SLA_WINDOW_MINUTES if window_minutes is None else window_minutes
    if window <= 0:
        raise ValueError(f"SLA window must be positive, got {window}")

    if snapshot.outreach_performed:
        return SlaStatus(progress_percentage=0.0, sla_met=True, ring=SlaRing.NONE)

    if snapshot.last_inbound_at is None:
        return SlaStatus(progress_percentage=0.0, sla_met=False, ring=SlaRing.FIRST)

    last_inbound = _as_utc(snapshot.last_inbound_at)
    sla_met = False

    if snapshot.first_qualified_at is not None:
        elapsed = _as_utc(snapshot.first_qualified_at) - last_inbound
        elapsed_minutes = elapsed.total_seconds() / 60
        sla_met = elapsed_minutes <= window
    else:
        current = _as_utc(now) if now else datetime.now(UTC)
        elapsed_minutes = (current - last_inbound).total_seconds() / 60

    progress = min(elapsed_minutes / window * 100, 100.0)

    return SlaStatus(
        progress_percentage=progress,
        sla_met=sla_met,
        ring=ring_for(progress, sla_met),
        elapsed_minutes=elapsed_minutes,
    )


async def get_lead_sla(lead_id: str, now: datetime | None = None) -> SlaStatus:
    snapshot = await LeadRepository.get_sla_snapshot(lead_id)
    if snapshot is None:
        raise LeadNotFoundError(lead_id)

    status = calculate_sla(snapshot, now=now)
    logger.debug(
        "Lead SLA calculated",
        lead_id=lead_id,
        progress_percentage=round(status.progress_percentage, 1),
        sla_met=status.sla_met,
        ring=status.ring.value,
    )
    return status


async def confirm_outreach(lead_id: str) -> SlaStatus:
    """Mark outreach as performed; the SLA counts as met from then on."""
    updated = await LeadRepository.mark_outreach_performed(lead_id)
    if not updated:
        raise LeadNotFoundError(lead_id)

    logger.info("Lead outreach confirmed", lead_id=lead_id)
    return SlaStatus(progress_percentage=0.0, sla_met=True, ring=SlaRing.NONE)
