"""
Activity Domain Models
Raw rows read from the task, event and email tables, and the common
ActivityRecord shape they are normalized into before summarization.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

EVENT_STATUS = "Completed"
EMAIL_STATUS = "Sent"


class ActivityKind(str, Enum):
    TASK = "Task"
    EVENT = "Event"
    EMAIL = "Email"


@dataclass(slots=True)
class TaskRow:
    id: str
    subject: str | None
    description: str | None
    status: str | None
    created_date: datetime
    related_to_name: str | None


@dataclass(slots=True)
class EventRow:
    id: str
    subject: str | None
    description: str | None
    created_date: datetime
    related_to_name: str | None


@dataclass(slots=True)
class EmailRow:
    id: str
    subject: str | None
    text_body: str | None
    created_date: datetime
    related_to_name: str | None


@dataclass(slots=True)
class AccountActivityRows:
    """The three raw collections returned for one account."""

    tasks: list[TaskRow] = field(default_factory=list)
    events: list[EventRow] = field(default_factory=list)
    emails: list[EmailRow] = field(default_factory=list)

    def total_count(self) -> int:
        return len(self.tasks) + len(self.events) + len(self.emails)


@dataclass(frozen=True, slots=True)
class ActivityRecord:
    """One task, event or email in the shape used for prompting."""

    kind: ActivityKind
    subject: str | None
    body: str | None
    status: str | None
    occurred_at: datetime
    related_to_name: str | None

    def has_body(self) -> bool:
        return bool(self.body and self.body.strip())


@dataclass(slots=True)
class ActivitySummaryResult:
    """
    Outcome of one summarization invocation.

    On success `summary` is set; on failure `error_message` is set and
    `status_code` carries the upstream HTTP status when there was one.
    """

    is_success: bool
    summary: str | None = None
    error_message: str | None = None
    status_code: int | None = None
    activity_count: int = 0

    @classmethod
    def success(cls, summary: str, activity_count: int = 0) -> "ActivitySummaryResult":
        return cls(is_success=True, summary=summary, status_code=200, activity_count=activity_count)

    @classmethod
    def failure(cls, message: str, status_code: int | None = None) -> "ActivitySummaryResult":
        return cls(is_success=False, error_message=message, status_code=status_code)
