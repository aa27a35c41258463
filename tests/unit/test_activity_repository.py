from unittest.mock import AsyncMock

import pytest
from conftest import BASE_TIME

from account_insights.repositories.activity_repository import ActivityRepository


def _row(row_id, **extra):
    return {"id": row_id, "subject": "s", "created_date": BASE_TIME, "related_to_name": "Acme", **extra}


@pytest.mark.asyncio
async def test_fetch_account_activity_queries_each_kind(monkeypatch):
    fetch_all = AsyncMock(
        side_effect=[
            [_row("t1", status="Open", description="d")],
            [_row("e1", description=None)],
            [],
        ]
    )
    monkeypatch.setattr("account_insights.repositories.activity_repository.fetch_all", fetch_all)

    rows = await ActivityRepository.fetch_account_activity("001A", limit=3)

    assert [t.id for t in rows.tasks] == ["t1"]
    assert rows.tasks[0].status == "Open"
    assert [e.id for e in rows.events] == ["e1"]
    assert rows.emails == []

    queries = [call.args[0] for call in fetch_all.await_args_list]
    assert "FROM tasks" in queries[0]
    assert "FROM events" in queries[1]
    assert "FROM email_messages" in queries[2]
    for call in fetch_all.await_args_list:
        assert "ORDER BY" in call.args[0] and "DESC" in call.args[0]
        assert call.args[1] == ("001A", 3)


@pytest.mark.asyncio
async def test_default_limit_comes_from_settings(monkeypatch):
    fetch_all = AsyncMock(return_value=[])
    monkeypatch.setattr("account_insights.repositories.activity_repository.fetch_all", fetch_all)
    monkeypatch.setattr("account_insights.repositories.activity_repository.settings.ACTIVITY_QUERY_LIMIT", 7)

    rows = await ActivityRepository.fetch_account_activity("001A")

    assert rows.total_count() == 0
    assert all(call.args[1] == ("001A", 7) for call in fetch_all.await_args_list)


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [0, -1, True, "10"])
async def test_invalid_limit_is_rejected(monkeypatch, limit):
    fetch_all = AsyncMock(return_value=[])
    monkeypatch.setattr("account_insights.repositories.activity_repository.fetch_all", fetch_all)

    with pytest.raises(ValueError):
        await ActivityRepository.fetch_tasks("001A", limit)

    fetch_all.assert_not_awaited()
