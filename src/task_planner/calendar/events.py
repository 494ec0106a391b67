# src/task_planner/calendar/events.py

from __future__ import annotations

from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo

from ..core.ports import CalendarEvent
from ..tasks.task_models import Priority, Task

SUMMARY_PREFIX = "[Task] "
DESCRIPTION_FOOTER = "Created by Task Planner"

# Google Calendar event palette ids.
PRIORITY_COLOR: dict[Priority, str] = {
    Priority.HIGH: "11",
    Priority.MEDIUM: "5",
    Priority.LOW: "2",
}


def build_event(
    task: Task,
    *,
    timezone: str = "Asia/Kolkata",
    start_hour: int = 9,
    duration_minutes: int = 60,
) -> CalendarEvent:
    """Map one due-dated task to a Calendar v3 event body."""
    if task.due_date is None:
        raise ValueError(f"task {task.id} has no due date")

    tz = ZoneInfo(timezone)
    start = datetime.combine(task.due_date, time(hour=start_hour), tzinfo=tz)
    end = start + timedelta(minutes=duration_minutes)

    return {
        "summary": f"{SUMMARY_PREFIX}{task.title}",
        "description": (
            f"Priority: {task.priority.value}\n"
            f"Size: {task.size}\n"
            f"Status: {task.status.value}\n"
            f"\n{DESCRIPTION_FOOTER}"
        ),
        "start": {"dateTime": start.isoformat(), "timeZone": timezone},
        "end": {"dateTime": end.isoformat(), "timeZone": timezone},
        "colorId": PRIORITY_COLOR[task.priority],
    }
