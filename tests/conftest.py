from datetime import UTC, datetime, timedelta

import pytest

from account_insights.config import GenerativeAIConfig
from account_insights.models.domain.activity_domain import (
    AccountActivityRows,
    EmailRow,
    EventRow,
    TaskRow,
)

GENAI_ENDPOINT = "https://genai.test/v1/models/test-model:generateContent?key=test-key"

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


def summary_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def make_task(minutes_ago: int, subject: str = "Call back", status: str = "Not Started", **kwargs):
    return TaskRow(
        id=kwargs.get("id", f"task-{minutes_ago}"),
        subject=subject,
        description=kwargs.get("description", "Discuss renewal"),
        status=status,
        created_date=BASE_TIME - timedelta(minutes=minutes_ago),
        related_to_name="Acme Corp",
    )


def make_event(minutes_ago: int, subject: str = "Quarterly review", **kwargs):
    return EventRow(
        id=kwargs.get("id", f"event-{minutes_ago}"),
        subject=subject,
        description=kwargs.get("description"),
        created_date=BASE_TIME - timedelta(minutes=minutes_ago),
        related_to_name="Acme Corp",
    )


def make_email(minutes_ago: int, subject: str = "Proposal", **kwargs):
    return EmailRow(
        id=kwargs.get("id", f"email-{minutes_ago}"),
        subject=subject,
        text_body=kwargs.get("text_body", "Attached is the proposal."),
        created_date=BASE_TIME - timedelta(minutes=minutes_ago),
        related_to_name="Acme Corp",
    )


class FakeActivityRepository:
    def __init__(self, rows: AccountActivityRows | None = None):
        self.rows = rows or AccountActivityRows()
        self.calls: list[tuple[str, int | None]] = []

    async def fetch_account_activity(self, account_id: str, limit: int | None = None):
        self.calls.append((account_id, limit))
        return self.rows


@pytest.fixture
def genai_config():
    return GenerativeAIConfig(api_key="test-key", base_url="https://genai.test", model="test-model")


@pytest.fixture
def fake_activity_repository():
    return FakeActivityRepository(
        AccountActivityRows(
            tasks=[make_task(10), make_task(30, subject="Send pricing", status="Completed")],
            events=[make_event(20)],
            emails=[make_email(5)],
        )
    )
