from conftest import BASE_TIME, make_email, make_event, make_task

from account_insights.models.domain.activity_domain import (
    AccountActivityRows,
    ActivityKind,
    ActivityRecord,
)
from account_insights.services.activity.normalizer import (
    email_to_activity,
    event_to_activity,
    normalize_activity,
    sort_by_recency,
    task_to_activity,
)


def _assert_non_increasing(records):
    for newer, older in zip(records, records[1:]):
        assert newer.occurred_at >= older.occurred_at


def test_three_tasks_two_events_no_emails():
    rows = AccountActivityRows(
        tasks=[make_task(50), make_task(5), make_task(25)],
        events=[make_event(15), make_event(40)],
        emails=[],
    )

    records = normalize_activity(rows)

    assert len(records) == 5
    _assert_non_increasing(records)
    assert [r.kind for r in records].count(ActivityKind.TASK) == 3
    for record in records:
        if record.kind == ActivityKind.EVENT:
            assert record.status == "Completed"
        else:
            assert record.status == "Not Started"


def test_output_count_is_sum_of_inputs():
    rows = AccountActivityRows(
        tasks=[make_task(i) for i in range(4)],
        events=[make_event(i) for i in range(7)],
        emails=[make_email(i) for i in range(2)],
    )

    records = normalize_activity(rows)

    assert len(records) == rows.total_count() == 13
    _assert_non_increasing(records)


def test_empty_input_gives_empty_output():
    assert normalize_activity(AccountActivityRows()) == []
    assert sort_by_recency([]) == []


def test_kind_specific_mappings():
    task = task_to_activity(make_task(1, status="In Progress", description="Notes"))
    event = event_to_activity(make_event(2, description="Agenda"))
    email = email_to_activity(make_email(3, text_body="Hello there"))

    assert task.kind == ActivityKind.TASK
    assert task.status == "In Progress"
    assert task.body == "Notes"

    assert event.kind == ActivityKind.EVENT
    assert event.status == "Completed"
    assert event.body == "Agenda"

    assert email.kind == ActivityKind.EMAIL
    assert email.status == "Sent"
    assert email.body == "Hello there"
    assert email.related_to_name == "Acme Corp"


def test_equal_timestamps_keep_input_order():
    records = [
        ActivityRecord(ActivityKind.TASK, f"s{i}", None, "Open", BASE_TIME, "Acme Corp")
        for i in range(4)
    ]
    older = ActivityRecord(ActivityKind.EMAIL, "old", None, "Sent", BASE_TIME.replace(hour=1), None)

    ordered = sort_by_recency([records[0], older, *records[1:]])

    assert [r.subject for r in ordered] == ["s0", "s1", "s2", "s3", "old"]
    assert sort_by_recency(ordered) == ordered


def test_tie_between_kinds_prefers_tasks_then_events_then_emails():
    rows = AccountActivityRows(
        tasks=[make_task(0, id="t")],
        events=[make_event(0, id="e")],
        emails=[make_email(0, id="m")],
    )

    records = normalize_activity(rows)

    assert [r.kind for r in records] == [ActivityKind.TASK, ActivityKind.EVENT, ActivityKind.EMAIL]


def test_sort_does_not_mutate_input():
    records = [task_to_activity(make_task(30)), task_to_activity(make_task(1))]
    original = list(records)

    ordered = sort_by_recency(records)

    assert records == original
    assert ordered[0].occurred_at > ordered[1].occurred_at
