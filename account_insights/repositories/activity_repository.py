"""
Repository helpers for account activity.

Reads the most recent tasks, events and emails related to an account. Each
query is bounded by a count limit and ordered newest first.
"""

from account_insights.config import settings
from account_insights.db.helpers import fetch_all
from account_insights.infrastructure.observability.logging import get_logger
from account_insights.models.domain.activity_domain import (
    AccountActivityRows,
    EmailRow,
    EventRow,
    TaskRow,
)

logger = get_logger(__name__)


def _check_limit(limit: int) -> None:
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")


class ActivityRepository:
    """Raw SQL reads for the three activity kinds."""

    @classmethod
    async def fetch_tasks(cls, account_id: str, limit: int) -> list[TaskRow]:
        _check_limit(limit)
        query = """
            SELECT
                t.id,
                t.subject,
                t.description,
                t.status,
                t.created_date,
                a.name AS related_to_name
            FROM tasks t
            LEFT JOIN accounts a ON a.id = t.related_to_id
            WHERE t.related_to_id = %s
            ORDER BY t.created_date DESC
            LIMIT %s
        """

        rows = await fetch_all(query, (account_id, limit))
        return [
            TaskRow(
                id=str(row["id"]),
                subject=row.get("subject"),
                description=row.get("description"),
                status=row.get("status"),
                created_date=row["created_date"],
                related_to_name=row.get("related_to_name"),
            )
            for row in rows
        ]

    @classmethod
    async def fetch_events(cls, account_id: str, limit: int) -> list[EventRow]:
        _check_limit(limit)
        query = """
            SELECT
                e.id,
                e.subject,
                e.description,
                e.created_date,
                a.name AS related_to_name
            FROM events e
            LEFT JOIN accounts a ON a.id = e.related_to_id
            WHERE e.related_to_id = %s
            ORDER BY e.created_date DESC
            LIMIT %s
        """

        rows = await fetch_all(query, (account_id, limit))
        return [
            EventRow(
                id=str(row["id"]),
                subject=row.get("subject"),
                description=row.get("description"),
                created_date=row["created_date"],
                related_to_name=row.get("related_to_name"),
            )
            for row in rows
        ]

    @classmethod
    async def fetch_emails(cls, account_id: str, limit: int) -> list[EmailRow]:
        _check_limit(limit)
        query = """
            SELECT
                m.id,
                m.subject,
                m.text_body,
                m.created_date,
                a.name AS related_to_name
            FROM email_messages m
            LEFT JOIN accounts a ON a.id = m.related_to_id
            WHERE m.related_to_id = %s
            ORDER BY m.created_date DESC
            LIMIT %s
        """

        rows = await fetch_all(query, (account_id, limit))
        return [
            EmailRow(
                id=str(row["id"]),
                subject=row.get("subject"),
                text_body=row.get("text_body"),
                created_date=row["created_date"],
                related_to_name=row.get("related_to_name"),
            )
            for row in rows
        ]

    @classmethod
    async def fetch_account_activity(
        cls, account_id: str, limit: int | None = None
    ) -> AccountActivityRows:
        """
        Fetch up to `limit` rows of each activity kind for an account.

        An account with no activity yields three empty lists.
        """
        if limit is None:
            limit = settings.ACTIVITY_QUERY_LIMIT

        tasks = await cls.fetch_tasks(account_id, limit)
        events = await cls.fetch_events(account_id, limit)
        emails = await cls.fetch_emails(account_id, limit)

        logger.debug(
            "Fetched account activity",
            account_id=account_id,
            task_count=len(tasks),
            event_count=len(events),
            email_count=len(emails),
        )
        return AccountActivityRows(tasks=tasks, events=events, emails=emails)
