# src/task_planner/view/pipeline.py

from __future__ import annotations

"""
View pipeline.

Pure functions from (task collection, filters) to what the console shows:
- project_tasks: filter + sort into a NEW list (input is never mutated)
- render_view: cards, empty state and the "Showing X of Y" count line

Nothing here holds state; callers re-run it after every mutation or filter change.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import StrEnum

from ..tasks.task_models import Priority, Task, TaskStatus

ALL = "all"


class SortKey(StrEnum):
    NEWEST = "newest"
    OLDEST = "oldest"
    DUE_DATE = "dueDate"
    PRIORITY = "priority"

    @classmethod
    def parse(cls, raw: str) -> SortKey:
        text = (raw or "").strip()
        for key in cls:
            if key.value.lower() == text.lower():
                return key
        raise ValueError(f"unknown sort key: {raw!r}")


PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}

STATUS_FILTERS: tuple[str, ...] = (ALL, *(s.value for s in TaskStatus))
PRIORITY_FILTERS: tuple[str, ...] = (ALL, *(p.value for p in Priority))


@dataclass(frozen=True, slots=True)
class ViewFilters:
    status: str = ALL
    priority: str = ALL
    sort: SortKey = SortKey.NEWEST


@dataclass(frozen=True, slots=True)
class RenderedView:
    tasks: list[Task]
    lines: list[str]
    count_line: str
    filtered: int
    total: int
    empty: bool = field(default=False)

    def as_text(self) -> str:
        return "\n".join([self.count_line, *self.lines])


def filters_active(filters: ViewFilters) -> bool:
    return filters.status != ALL or filters.priority != ALL


# ---- filter changes (return new ViewFilters; validation lives here) ----

def set_status_filter(filters: ViewFilters, value: str) -> ViewFilters:
    v = (value or "").strip().lower()
    if v not in STATUS_FILTERS:
        raise ValueError(f"unknown status filter: {value!r}")
    return replace(filters, status=v)


def set_priority_filter(filters: ViewFilters, value: str) -> ViewFilters:
    v = (value or "").strip().lower()
    if v not in PRIORITY_FILTERS:
        raise ValueError(f"unknown priority filter: {value!r}")
    return replace(filters, priority=v)


def set_sort(filters: ViewFilters, value: str | SortKey) -> ViewFilters:
    key = value if isinstance(value, SortKey) else SortKey.parse(value)
    return replace(filters, sort=key)


def clear_filters() -> ViewFilters:
    return ViewFilters()


# ---- projection ----

def _created_key(task: Task) -> datetime:
    return task.created_at


def project_tasks(tasks: Sequence[Task], filters: ViewFilters) -> list[Task]:
    """Filter by status, then priority, then sort a copy. Sorts are stable."""
    selected: list[Task] = list(tasks)

    if filters.status != ALL:
        selected = [t for t in selected if t.status.value == filters.status]

    if filters.priority != ALL:
        selected = [t for t in selected if t.priority.value == filters.priority]

    if filters.sort == SortKey.NEWEST:
        selected.sort(key=_created_key, reverse=True)
    elif filters.sort == SortKey.OLDEST:
        selected.sort(key=_created_key)
    elif filters.sort == SortKey.DUE_DATE:
        # undated tasks always last, whatever order the dated ones take
        selected.sort(key=lambda t: (t.due_date is None, t.due_date or date.min))
    elif filters.sort == SortKey.PRIORITY:
        selected.sort(key=lambda t: PRIORITY_RANK[t.priority])

    return selected


# ---- rendering ----

_EMPTY_FILTERED = (
    "No tasks match your filters.",
    "Try clearing filters or adding new tasks!",
)
_EMPTY_STORE = (
    "No tasks yet. Start planning your day!",
    "Use /submit to add your first task.",
)


def count_line(filtered: int, total: int) -> str:
    return f"Showing {filtered} of {total} tasks"


def render_card(task: Task) -> list[str]:
    due = task.due_date.isoformat() if task.due_date else "No date"
    return [
        f"#{task.id}  {task.title}  [{task.priority.value.upper()}]",
        f"    Size: {task.size} | Due: {due} | Status: {task.status.value}",
        f"    /edit {task.id}  /delete {task.id}",
    ]


def render_view(tasks: Sequence[Task], filters: ViewFilters) -> RenderedView:
    shown = project_tasks(tasks, filters)
    total = len(tasks)

    if not shown:
        message = _EMPTY_FILTERED if filters_active(filters) else _EMPTY_STORE
        return RenderedView(
            tasks=[],
            lines=list(message),
            count_line=count_line(0, total),
            filtered=0,
            total=total,
            empty=True,
        )

    lines: list[str] = []
    for task in shown:
        lines.extend(render_card(task))

    return RenderedView(
        tasks=shown,
        lines=lines,
        count_line=count_line(len(shown), total),
        filtered=len(shown),
        total=total,
    )


def describe_filters(filters: ViewFilters) -> str:
    return f"status={filters.status} priority={filters.priority} sort={filters.sort.value}"
