# tests/test_calendar_sync.py

from __future__ import annotations

import pytest

from task_planner.calendar.exporter import CalendarExporter
from task_planner.calendar.status import StatusLevel
from task_planner.calendar.sync import NOTHING_TO_SYNC, sync_tasks_to_calendar
from task_planner.tasks.task_store import TaskStore

from .fakes import FakeCalendarGateway, make_task


@pytest.mark.asyncio
async def test_partial_failure_is_counted_and_batch_continues() -> None:
    tasks = [
        make_task(1, "X", due="2024-01-10"),
        make_task(2, "no date"),
        make_task(3, "Y", due="2024-01-11"),
    ]
    gw = FakeCalendarGateway(fail_titles={"[Task] X"})

    report = await sync_tasks_to_calendar(tasks, gw)

    assert report.success_count == 1
    assert report.error_count == 1
    assert report.status.text == "Synced 1 task successfully! (1 failed)"
    assert report.status.level is StatusLevel.SUCCESS
    assert [e["summary"] for _, e in gw.inserted] == ["[Task] Y"]


@pytest.mark.asyncio
async def test_all_succeed_message() -> None:
    tasks = [make_task(1, "A", due="2024-01-10"), make_task(2, "B", due="2024-01-12")]
    gw = FakeCalendarGateway()

    report = await sync_tasks_to_calendar(tasks, gw, calendar_id="work")

    assert (report.success_count, report.error_count) == (2, 0)
    assert report.status.text == "Synced 2 tasks successfully! Check your Google Calendar!"
    assert [cal for cal, _ in gw.inserted] == ["work", "work"]


@pytest.mark.asyncio
async def test_every_event_failing_is_an_error() -> None:
    tasks = [make_task(1, "A", due="2024-01-10")]
    gw = FakeCalendarGateway(fail_titles={"A"})

    report = await sync_tasks_to_calendar(tasks, gw)

    assert (report.success_count, report.error_count) == (0, 1)
    assert report.status.level is StatusLevel.ERROR
    assert report.status.text == "Synced 0 tasks successfully! (1 failed)"


@pytest.mark.asyncio
async def test_nothing_due_is_a_warning() -> None:
    gw = FakeCalendarGateway()
    report = await sync_tasks_to_calendar([make_task(1, "A")], gw)

    assert report.attempted == 0
    assert report.status.text == NOTHING_TO_SYNC
    assert report.status.level is StatusLevel.WARNING
    assert gw.inserted == []


@pytest.mark.asyncio
async def test_exporter_sync_requires_authorization_and_resubmits(store: TaskStore) -> None:
    store.add(title="Dentist", due_date="2024-03-04", priority="high")
    gw = FakeCalendarGateway()
    exporter = CalendarExporter(gw, timezone="UTC")
    exporter.initialize()

    refused = await exporter.sync(store)
    assert refused.attempted == 0
    assert refused.status.level is StatusLevel.ERROR

    exporter.connect()
    first = await exporter.sync(store)
    second = await exporter.sync(store)

    assert first.success_count == 1 and second.success_count == 1
    # no de-duplication: the same task is exported twice
    assert len(gw.inserted) == 2
    assert gw.inserted[0][1]["start"]["timeZone"] == "UTC"
    assert gw.inserted[0][1]["colorId"] == "11"
