"""
Repository helpers for lead SLA tracking.
"""

from account_insights.db.helpers import execute_query, fetch_one
from account_insights.models.domain.lead_domain import LeadSlaSnapshot


class LeadRepository:
    """Raw SQL helpers for lead response-time fields."""

    @classmethod
    async def get_sla_snapshot(cls, lead_id: str) -> LeadSlaSnapshot | None:
        query = """
            SELECT id, last_inbound_at, first_qualified_at, outreach_performed
            FROM leads
            WHERE id = %s
        """

        row = await fetch_one(query, (lead_id,))
        if not row:
            return None

        return LeadSlaSnapshot(
            lead_id=str(row["id"]),
            last_inbound_at=row.get("last_inbound_at"),
            first_qualified_at=row.get("first_qualified_at"),
            outreach_performed=bool(row.get("outreach_performed")),
        )

    @classmethod
    async def mark_outreach_performed(cls, lead_id: str) -> bool:
        query = """
            UPDATE leads
            SET outreach_performed = true, updated_at = NOW()
            WHERE id = %s
        """

        return await execute_query(query, (lead_id,)) > 0
