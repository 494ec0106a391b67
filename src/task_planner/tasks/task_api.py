# src/task_planner/tasks/task_api.py

from __future__ import annotations

"""
Task form + high-level task operations used by the command layer.

The form is a two-state machine:
- Idle            (editing_id is None): submit creates a task
- Editing(id)     : submit updates that task, then the form returns to Idle
Edit-start moves to Editing(id) and overwrites any previous edit. There is no
cancel path other than submitting or starting another edit.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from enum import StrEnum

from ..core.ports import Confirm
from ..core.state import AppState
from .task_models import Priority, Task, TaskStatus

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this task?"
EMPTY_TITLE_MESSAGE = "Please enter a task title!"
NOT_FOUND_MESSAGE = "Task not found!"

FORM_FIELDS: tuple[str, ...] = ("title", "priority", "size", "due", "status")


class FormMode(StrEnum):
    IDLE = "idle"
    EDITING = "editing"


@dataclass(frozen=True, slots=True)
class FormValues:
    title: str = ""
    priority: Priority = Priority.MEDIUM
    size: str = "medium"
    due_date: date | None = None
    status: TaskStatus = TaskStatus.TODO


@dataclass(slots=True)
class TaskForm:
    values: FormValues = field(default_factory=FormValues)
    editing_id: int | None = None

    @property
    def mode(self) -> FormMode:
        return FormMode.IDLE if self.editing_id is None else FormMode.EDITING

    def reset(self) -> None:
        self.values = FormValues()
        self.editing_id = None

    def load(self, task: Task) -> None:
        self.values = FormValues(
            title=task.title,
            priority=task.priority,
            size=task.size,
            due_date=task.due_date,
            status=task.status,
        )
        self.editing_id = task.id

    def describe(self) -> str:
        v = self.values
        head = f"Editing task #{self.editing_id}" if self.editing_id is not None else "New task"
        due = v.due_date.isoformat() if v.due_date else ""
        return (
            f"{head}:\n"
            f"  title={v.title}\n"
            f"  priority={v.priority.value}\n"
            f"  size={v.size}\n"
            f"  due={due}\n"
            f"  status={v.status.value}"
        )


@dataclass(frozen=True, slots=True)
class SubmitOutcome:
    ok: bool
    message: str
    task: Task | None = None


def apply_fields(values: FormValues, fields: Mapping[str, str]) -> FormValues:
    """
    Overlay raw (string) field input onto form values.

    Raises ValueError for unknown fields or values outside the allowed sets.
    An empty `due` clears the date.
    """
    out = values
    for name, raw in fields.items():
        key = name.strip().lower()
        text = (raw or "").strip()

        if key == "title":
            out = replace(out, title=text)
        elif key == "priority":
            try:
                out = replace(out, priority=Priority(text.lower()))
            except ValueError:
                raise ValueError(
                    f"Invalid priority '{raw}'. Use one of: {', '.join(p.value for p in Priority)}."
                ) from None
        elif key == "size":
            if text:
                out = replace(out, size=text)
        elif key in ("due", "duedate", "due_date"):
            if not text:
                out = replace(out, due_date=None)
                continue
            try:
                out = replace(out, due_date=date.fromisoformat(text))
            except ValueError:
                raise ValueError(f"Invalid date '{raw}'. Use YYYY-MM-DD.") from None
        elif key == "status":
            try:
                out = replace(out, status=TaskStatus(text.lower()))
            except ValueError:
                raise ValueError(
                    f"Invalid status '{raw}'. Use one of: {', '.join(s.value for s in TaskStatus)}."
                ) from None
        else:
            raise ValueError(f"Unknown field '{name}'. Fields: {', '.join(FORM_FIELDS)}.")
    return out


def start_edit(state: AppState, task_id: int) -> str:
    """Load one task into the form and remember it as the task being edited."""
    task = state.task_store.get(task_id)
    if task is None:
        return NOT_FOUND_MESSAGE

    previous = state.form.editing_id
    state.form.load(task)
    if previous is not None and previous != task_id:
        logger.debug("Edit of task %s abandoned for task %s", previous, task_id)
    logger.info("Editing task id=%s", task_id)
    return state.form.describe()


def submit_form(state: AppState, fields: Mapping[str, str] | None = None) -> SubmitOutcome:
    """
    Submit the form: update when editing, create otherwise.

    Field overrides are applied first and stay on the form if validation
    rejects the submission (the user's input is not thrown away).
    """
    form = state.form
    form.values = apply_fields(form.values, fields or {})

    values = form.values
    if not values.title.strip():
        return SubmitOutcome(ok=False, message=EMPTY_TITLE_MESSAGE)

    if form.editing_id is not None:
        task_id = form.editing_id
        task = state.task_store.update(
            task_id,
            title=values.title,
            priority=values.priority,
            size=values.size,
            due_date=values.due_date,
            status=values.status,
        )
        form.reset()
        state.reload_tasks()
        if task is None:
            # Deleted elsewhere while being edited; nothing to update.
            return SubmitOutcome(ok=True, message=f"Task #{task_id} no longer exists; nothing saved.")
        return SubmitOutcome(ok=True, message=f"Task #{task.id} updated.", task=task)

    task = state.task_store.add(
        title=values.title,
        priority=values.priority,
        size=values.size,
        due_date=values.due_date,
        status=values.status,
    )
    form.reset()
    state.reload_tasks()
    return SubmitOutcome(ok=True, message=f"Task #{task.id} added: {task.title}", task=task)


def delete_task(state: AppState, task_id: int, confirm: Confirm) -> str:
    if not confirm(DELETE_PROMPT):
        return "Delete cancelled."

    removed = state.task_store.delete(task_id)
    state.reload_tasks()
    if not removed:
        return f"Task #{task_id} not found."
    return f"Task #{task_id} deleted."
