"""
Maps raw task, event and email rows into ActivityRecord and orders the
merged collection newest first.
"""

from collections.abc import Iterable

from account_insights.models.domain.activity_domain import (
    EMAIL_STATUS,
    EVENT_STATUS,
    AccountActivityRows,
    ActivityKind,
    ActivityRecord,
    EmailRow,
    EventRow,
    TaskRow,
)


def task_to_activity(row: TaskRow) -> ActivityRecord:
    return ActivityRecord(
        kind=ActivityKind.TASK,
        subject=row.subject,
        body=row.description,
        status=row.status,
        occurred_at=row.created_date,
        related_to_name=row.related_to_name,
    )


def event_to_activity(row: EventRow) -> ActivityRecord:
    return ActivityRecord(
        kind=ActivityKind.EVENT,
        subject=row.subject,
        body=row.description,
        status=EVENT_STATUS,
        occurred_at=row.created_date,
        related_to_name=row.related_to_name,
    )


def email_to_activity(row: EmailRow) -> ActivityRecord:
    return ActivityRecord(
        kind=ActivityKind.EMAIL,
        subject=row.subject,
        body=row.text_body,
        status=EMAIL_STATUS,
        occurred_at=row.created_date,
        related_to_name=row.related_to_name,
    )


def sort_by_recency(records: Iterable[ActivityRecord]) -> list[ActivityRecord]:
    """
    Return a new list ordered by occurred_at, newest first.

    sorted() is stable with reverse=True, so records sharing a timestamp
    keep their input order.
    """
    return sorted(records, key=lambda record: record.occurred_at, reverse=True)


def normalize_activity(rows: AccountActivityRows) -> list[ActivityRecord]:
    """Map all three collections (tasks, then events, then emails) and sort."""
    records: list[ActivityRecord] = []
    records.extend(task_to_activity(row) for row in rows.tasks)
    records.extend(event_to_activity(row) for row in rows.events)
    records.extend(email_to_activity(row) for row in rows.emails)
    return sort_by_recency(records)
