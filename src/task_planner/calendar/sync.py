# src/task_planner/calendar/sync.py

from __future__ import annotations

"""
Task -> calendar sync.

One event per due-dated task, submitted strictly one after another. A failure
on one event is logged and counted; the batch always runs to the end and the
result is reported as counts. There is no retry and no de-duplication: running
it twice creates every event twice.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..core.ports import CalendarGateway
from ..tasks.task_models import Task
from .events import build_event
from .status import StatusLevel, StatusMessage

logger = logging.getLogger(__name__)

NOTHING_TO_SYNC = "No tasks with due dates to sync. Add due dates first!"


@dataclass(frozen=True, slots=True)
class SyncReport:
    success_count: int
    error_count: int
    status: StatusMessage

    @property
    def attempted(self) -> int:
        return self.success_count + self.error_count


def summarize(success_count: int, error_count: int) -> StatusMessage:
    plural = "" if success_count == 1 else "s"
    text = f"Synced {success_count} task{plural} successfully!"
    text += f" ({error_count} failed)" if error_count > 0 else " Check your Google Calendar!"
    level = StatusLevel.SUCCESS if success_count > 0 else StatusLevel.ERROR
    return StatusMessage(text, level)


async def sync_tasks_to_calendar(
    tasks: Iterable[Task],
    gateway: CalendarGateway,
    *,
    calendar_id: str = "primary",
    timezone: str = "Asia/Kolkata",
    start_hour: int = 9,
    duration_minutes: int = 60,
) -> SyncReport:
    dated = [t for t in tasks if t.due_date is not None]
    if not dated:
        logger.warning("No tasks with due dates found")
        return SyncReport(0, 0, StatusMessage(NOTHING_TO_SYNC, StatusLevel.WARNING))

    logger.info("Syncing %d tasks to calendar=%s", len(dated), calendar_id)

    success_count = 0
    error_count = 0
    for task in dated:
        try:
            event = build_event(
                task,
                timezone=timezone,
                start_hour=start_hour,
                duration_minutes=duration_minutes,
            )
            response = await gateway.insert_event(calendar_id, event)
            logger.info("Created event for task_id=%s event_id=%s", task.id, (response or {}).get("id"))
            success_count += 1
        except Exception:
            logger.exception("Error creating event for task_id=%s title=%r", task.id, task.title)
            error_count += 1

    logger.info("Sync complete success=%d errors=%d", success_count, error_count)
    return SyncReport(success_count, error_count, summarize(success_count, error_count))
