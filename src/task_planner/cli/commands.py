# src/task_planner/cli/commands.py

from __future__ import annotations

import asyncio
import shlex
from collections.abc import Callable

from ..calendar.status import StatusLevel, StatusMessage
from ..core.ports import ConsoleIO
from ..core.state import AppState
from ..tasks.task_api import FORM_FIELDS, delete_task, start_edit, submit_form
from ..view.pipeline import (
    PRIORITY_FILTERS,
    STATUS_FILTERS,
    SortKey,
    clear_filters,
    describe_filters,
    render_view,
    set_priority_filter,
    set_sort,
    set_status_filter,
)

CommandHandler = Callable[[AppState, list[str], ConsoleIO | None], str]


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /submit, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str, io: ConsoleIO | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError:
            return "Could not parse command (unbalanced quotes?)."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args, io)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----

def _view_text(state: AppState) -> str:
    return render_view(state.tasks, state.filters).as_text()


def _with_view(state: AppState, message: str) -> str:
    return f"{message}\n{_view_text(state)}"


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


_FIELD_KEYS = frozenset(FORM_FIELDS) | {"duedate", "due_date"}


def parse_fields(args: list[str]) -> dict[str, str]:
    """
    key=value tokens with a form field name become fields; everything else
    (including words like "a=b") is joined into the title.

        /submit Buy milk priority=high due=2024-01-10
    """
    fields: dict[str, str] = {}
    bare: list[str] = []
    for token in args:
        key, sep, value = token.partition("=")
        key = key.strip().lower()
        if sep and key in _FIELD_KEYS:
            fields[key] = value
        else:
            bare.append(token)
    if bare and "title" not in fields:
        fields["title"] = " ".join(bare)
    return fields


# ---- task commands ----

def cmd_help(state: AppState, args: list[str], io: ConsoleIO | None) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str], io: ConsoleIO | None) -> str:
    state.reload_tasks()
    return f"View: {describe_filters(state.filters)}\n{_view_text(state)}"


def cmd_form(state: AppState, args: list[str], io: ConsoleIO | None) -> str:
    return state.form.describe()


def cmd_submit(state: AppState, args: list[str], io: ConsoleIO | None) -> str:
    """
    /submit [title words] [title=..] [priority=..] [size=..] [due=YYYY-MM-DD] [status=..]

    Creates a task, or updates the task loaded with /edit.
    """
    try:
        outcome = submit_form(state, parse_fields(args))
    except ValueError as e:
        return f"{e}\nFields: {', '.join(FORM_FIELDS)}."
    if not outcome.ok:
        return outcome.message
    return _with_view(state, outcome.message)


def cmd_edit(state: AppState, args: list[str], io: ConsoleIO | None) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /edit <id>"
    reply = start_edit(state, task_id)
    if state.form.editing_id != task_id:
        return reply
    return f"{reply}\nChange fields with /submit key=value ... (e.g. /submit status=done)."


def cmd_delete(state: AppState, args: list[str], io: ConsoleIO | None) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /delete <id>"
    if io is None:
        return "Delete needs an interactive console to confirm."
    return _with_view(state, delete_task(state, task_id, io.confirm))


# ---- view commands ----

def cmd_filter(state: AppState, args: list[str], io: ConsoleIO | None) -> str:
    if not args:
        return f"Usage: /filter <{'|'.join(STATUS_FILTERS)}>"
    try:
        state.filters = set_status_filter(state.filters, args[0])
    except ValueError:
        return f"Unknown status. Use one of: {', '.join(STATUS_FILTERS)}."
    return _view_text(state)


def cmd_priority(state: AppState, args: list[str], io: ConsoleIO | None) -> str:
    if not args:
        return f"Usage: /priority <{'|'.join(PRIORITY_FILTERS)}>"
    try:
        state.filters = set_priority_filter(state.filters, args[0])
    except ValueError:
        return f"Unknown priority. Use one of: {', '.join(PRIORITY_FILTERS)}."
    return _view_text(state)


def cmd_sort(state: AppState, args: list[str], io: ConsoleIO | None) -> str:
    keys = "|".join(k.value for k in SortKey)
    if not args:
        return f"Usage: /sort <{keys}>"
    try:
        state.filters = set_sort(state.filters, args[0])
    except ValueError:
        return f"Unknown sort key. Use one of: {keys}."
    return _view_text(state)


def cmd_clear(state: AppState, args: list[str], io: ConsoleIO | None) -> str:
    state.filters = clear_filters()
    return _view_text(state)


# ---- calendar commands ----

def cmd_calendar(state: AppState, args: list[str], io: ConsoleIO | None) -> str:
    if state.calendar is None:
        return "Calendar export is disabled."
    return f"{state.calendar.status.render()}\n  state: {state.calendar.phase.value}"


def cmd_connect(state: AppState, args: list[str], io: ConsoleIO | None) -> str:
    if state.calendar is None:
        return "Calendar export is disabled."
    if io is not None:
        io.emit("[CALENDAR] Opening the browser for Google sign-in...")
    return state.calendar.connect().render()


def cmd_sync(state: AppState, args: list[str], io: ConsoleIO | None) -> str:
    if state.calendar is None:
        return "Calendar export is disabled."
    if io is not None:
        io.emit(StatusMessage("Syncing tasks to calendar...", StatusLevel.INFO).render())
    report = asyncio.run(state.calendar.sync(state.task_store))
    return report.status.render()


def cmd_signout(state: AppState, args: list[str], io: ConsoleIO | None) -> str:
    if state.calendar is None:
        return "Calendar export is disabled."
    return state.calendar.sign_out().render()


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks (current filters/sort).", aliases=["ls"])
registry.register("form", cmd_form, help_text="Show the task form (new or editing).")
registry.register(
    "submit",
    cmd_submit,
    help_text="Submit the form: /submit <title> priority=.. size=.. due=YYYY-MM-DD status=..",
    aliases=["add", "save"],
)
registry.register("edit", cmd_edit, help_text="Load a task into the form: /edit <id>.")
registry.register("delete", cmd_delete, help_text="Delete a task (asks first): /delete <id>.", aliases=["rm"])
registry.register("filter", cmd_filter, help_text="Filter by status: /filter all|todo|in-progress|done.")
registry.register("priority", cmd_priority, help_text="Filter by priority: /priority all|high|medium|low.")
registry.register("sort", cmd_sort, help_text="Sort: /sort newest|oldest|dueDate|priority.")
registry.register("clear", cmd_clear, help_text="Clear filters and sort.")
registry.register("calendar", cmd_calendar, help_text="Show Google Calendar connection status.")
registry.register("connect", cmd_connect, help_text="Connect Google Calendar.")
registry.register("sync", cmd_sync, help_text="Export due-dated tasks as calendar events.")
registry.register("signout", cmd_signout, help_text="Disconnect Google Calendar.")
