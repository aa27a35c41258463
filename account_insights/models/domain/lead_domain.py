"""
Lead Domain Models
Inputs and outputs of the first-response SLA calculation for leads.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SlaRing(str, Enum):
    FIRST = "first"  # inside the window
    SECOND = "second"  # 75% or more of the window used
    THIRD = "third"  # window exhausted, SLA missed
    NONE = "none"


@dataclass(slots=True)
class LeadSlaSnapshot:
    lead_id: str
    last_inbound_at: datetime | None
    first_qualified_at: datetime | None
    outreach_performed: bool


@dataclass(slots=True)
class SlaStatus:
    progress_percentage: float
    sla_met: bool
    ring: SlaRing
    elapsed_minutes: float | None = None
