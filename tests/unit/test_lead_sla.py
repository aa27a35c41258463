from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from conftest import BASE_TIME

from account_insights.models.domain.lead_domain import LeadSlaSnapshot, SlaRing
from account_insights.repositories.lead_repository import LeadRepository
from account_insights.services.lead_sla_service import (
    LeadNotFoundError,
    calculate_sla,
    confirm_outreach,
    get_lead_sla,
    ring_for,
)


def _snapshot(inbound_minutes_ago=None, qualified_after=None, outreach=False):
    last_inbound = None
    if inbound_minutes_ago is not None:
        last_inbound = BASE_TIME - timedelta(minutes=inbound_minutes_ago)
    first_qualified = None
    if qualified_after is not None:
        first_qualified = last_inbound + timedelta(minutes=qualified_after)
    return LeadSlaSnapshot(
        lead_id="lead-1",
        last_inbound_at=last_inbound,
        first_qualified_at=first_qualified,
        outreach_performed=outreach,
    )


class TestCalculateSla:
    def test_outreach_performed_counts_as_met(self):
        status = calculate_sla(_snapshot(inbound_minutes_ago=90, outreach=True), now=BASE_TIME)

        assert status.progress_percentage == 0
        assert status.sla_met is True
        assert status.ring == SlaRing.NONE

    def test_no_inbound_contact_yet(self):
        status = calculate_sla(_snapshot(), now=BASE_TIME)

        assert status.progress_percentage == 0
        assert status.sla_met is False
        assert status.ring == SlaRing.FIRST

    def test_running_window_early(self):
        status = calculate_sla(_snapshot(inbound_minutes_ago=6), now=BASE_TIME, window_minutes=30)

        assert status.progress_percentage == pytest.approx(20.0)
        assert status.sla_met is False
        assert status.ring == SlaRing.FIRST
        assert status.elapsed_minutes == pytest.approx(6.0)

    def test_running_window_late(self):
        status = calculate_sla(_snapshot(inbound_minutes_ago=24), now=BASE_TIME, window_minutes=30)

        assert status.progress_percentage == pytest.approx(80.0)
        assert status.ring == SlaRing.SECOND

    def test_window_exhausted_is_capped(self):
        status = calculate_sla(_snapshot(inbound_minutes_ago=120), now=BASE_TIME, window_minutes=30)

        assert status.progress_percentage == 100
        assert status.sla_met is False
        assert status.ring == SlaRing.THIRD

    def test_qualified_within_window(self):
        status = calculate_sla(
            _snapshot(inbound_minutes_ago=500, qualified_after=10), now=BASE_TIME, window_minutes=30
        )

        assert status.sla_met is True
        assert status.progress_percentage == pytest.approx(100 / 3)
        assert status.ring == SlaRing.NONE

    def test_qualified_after_window(self):
        status = calculate_sla(
            _snapshot(inbound_minutes_ago=500, qualified_after=45), now=BASE_TIME, window_minutes=30
        )

        assert status.sla_met is False
        assert status.progress_percentage == 100
        assert status.ring == SlaRing.THIRD

    def test_explicit_window_overrides_setting(self, monkeypatch):
        monkeypatch.setattr(
            "account_insights.services.lead_sla_service.settings.SLA_WINDOW_MINUTES", 30
        )

        status = calculate_sla(_snapshot(inbound_minutes_ago=6), now=BASE_TIME, window_minutes=12)

        assert status.progress_percentage == pytest.approx(50.0)

    def test_zero_window_is_rejected(self):
        with pytest.raises(ValueError):
            calculate_sla(_snapshot(inbound_minutes_ago=6), now=BASE_TIME, window_minutes=0)

    def test_naive_timestamps_are_treated_as_utc(self):
        snapshot = _snapshot(inbound_minutes_ago=15)
        snapshot.last_inbound_at = snapshot.last_inbound_at.replace(tzinfo=None)

        status = calculate_sla(snapshot, now=BASE_TIME, window_minutes=30)

        assert status.progress_percentage == pytest.approx(50.0)


@pytest.mark.parametrize(
    "progress,sla_met,expected",
    [
        (0.0, False, SlaRing.FIRST),
        (74.9, False, SlaRing.FIRST),
        (75.0, False, SlaRing.SECOND),
        (99.9, False, SlaRing.SECOND),
        (100.0, False, SlaRing.THIRD),
        (40.0, True, SlaRing.NONE),
        (100.0, True, SlaRing.NONE),
    ],
)
def test_ring_for(progress, sla_met, expected):
    assert ring_for(progress, sla_met) == expected


@pytest.mark.asyncio
async def test_get_lead_sla_loads_snapshot(monkeypatch):
    monkeypatch.setattr(
        LeadRepository, "get_sla_snapshot", AsyncMock(return_value=_snapshot(inbound_minutes_ago=3))
    )

    status = await get_lead_sla("lead-1", now=BASE_TIME)

    assert status.ring == SlaRing.FIRST
    assert status.progress_percentage == pytest.approx(10.0)


@pytest.mark.asyncio
async def test_get_lead_sla_unknown_lead(monkeypatch):
    monkeypatch.setattr(LeadRepository, "get_sla_snapshot", AsyncMock(return_value=None))

    with pytest.raises(LeadNotFoundError):
        await get_lead_sla("missing")


@pytest.mark.asyncio
async def test_confirm_outreach(monkeypatch):
    mark = AsyncMock(return_value=True)
    monkeypatch.setattr(LeadRepository, "mark_outreach_performed", mark)

    status = await confirm_outreach("lead-1")

    mark.assert_awaited_once_with("lead-1")
    assert status.sla_met is True
    assert status.ring == SlaRing.NONE


@pytest.mark.asyncio
async def test_confirm_outreach_unknown_lead(monkeypatch):
    monkeypatch.setattr(LeadRepository, "mark_outreach_performed", AsyncMock(return_value=False))

    with pytest.raises(LeadNotFoundError):
        await confirm_outreach("missing")
