# src/task_planner/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (storage/tasks/calendar).
"""

from __future__ import annotations

import logging

from ..calendar.exporter import CalendarExporter
from ..calendar.google_gateway import GoogleCalendarGateway
from ..config import get_settings
from ..core.ports import CalendarGateway
from ..core.state import AppState
from ..tasks.local_storage import LocalStorage
from ..tasks.task_api import TaskForm
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, gateway: CalendarGateway | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the calendar gateway) injectable makes the app easier
    to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage = LocalStorage(settings.storage_path)
    task_store = TaskStore(storage, key=settings.storage_key)

    calendar: CalendarExporter | None = None
    if settings.calendar_enabled:
        if gateway is None:
            gateway = GoogleCalendarGateway(
                settings.google_client_secrets_path,
                local_port=settings.oauth_local_port,
            )
        calendar = CalendarExporter.from_settings(gateway, settings)
    else:
        logger.info("Calendar export disabled (PLANNER_CALENDAR_ENABLED=false).")

    state = AppState(
        settings=settings,
        task_store=task_store,
        form=TaskForm(),
        calendar=calendar,
    )
    state.reload_tasks()
    return state
