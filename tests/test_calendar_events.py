# tests/test_calendar_events.py

from __future__ import annotations

import pytest

from task_planner.calendar.events import PRIORITY_COLOR, build_event
from task_planner.tasks.task_models import Priority

from .fakes import make_task


def test_event_body_for_due_dated_task() -> None:
    task = make_task(1, "Ship release", priority="high", size="large", status="in-progress", due="2024-01-10")
    event = build_event(task, timezone="Asia/Kolkata")

    assert event["summary"] == "[Task] Ship release"
    assert event["description"] == (
        "Priority: high\nSize: large\nStatus: in-progress\n\nCreated by Task Planner"
    )
    assert event["start"] == {"dateTime": "2024-01-10T09:00:00+05:30", "timeZone": "Asia/Kolkata"}
    assert event["end"] == {"dateTime": "2024-01-10T10:00:00+05:30", "timeZone": "Asia/Kolkata"}
    assert event["colorId"] == "11"


def test_color_table_covers_every_priority() -> None:
    assert set(PRIORITY_COLOR) == set(Priority)
    assert PRIORITY_COLOR[Priority.MEDIUM] == "5"
    assert PRIORITY_COLOR[Priority.LOW] == "2"


def test_start_hour_and_duration_are_configurable() -> None:
    task = make_task(1, "Standup", priority="low", due="2024-06-03")
    event = build_event(task, timezone="UTC", start_hour=14, duration_minutes=30)
    assert event["start"]["dateTime"] == "2024-06-03T14:00:00+00:00"
    assert event["end"]["dateTime"] == "2024-06-03T14:30:00+00:00"
    assert event["colorId"] == "2"


def test_undated_task_has_no_event() -> None:
    with pytest.raises(ValueError):
        build_event(make_task(1, "Someday"))
