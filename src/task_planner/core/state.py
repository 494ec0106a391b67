# src/task_planner/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore
from ..view.pipeline import ViewFilters

if TYPE_CHECKING:
    from ..calendar.exporter import CalendarExporter
    from ..tasks.task_api import TaskForm


@dataclass
class AppState:
    """
    Everything the command handlers touch, passed explicitly.

    `tasks` is the in-memory copy of the persisted collection; it is refreshed
    from the store after every mutation so the view never drifts from disk.
    """

    # Store Settings on the state for easy access in other modules later.
    settings: object

    task_store: TaskStore
    form: TaskForm
    calendar: CalendarExporter | None = None

    tasks: list[Task] = field(default_factory=list)
    filters: ViewFilters = field(default_factory=ViewFilters)

    def reload_tasks(self) -> list[Task]:
        self.tasks = self.task_store.load()
        return self.tasks
