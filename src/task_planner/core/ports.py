# src/task_planner/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the calendar provider and the console swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import Any, Awaitable, Protocol

CalendarEvent = dict[str, Any]
# Google Calendar v3 event body: {"summary": ..., "start": {...}, "end": {...}, ...}.

Confirm = Callable[[str], bool]
# Blocking yes/no question to the user (delete confirmation).


class CalendarGateway(Protocol):
    """
    External calendar service.

    Two independent libraries must load before authorization is possible:
    - the API client (service description / discovery document)
    - the identity client (OAuth client configuration)
    Each load method raises on failure.
    """

    def load_api_client(self) -> None: ...
    def load_identity(self) -> None: ...

    def has_token(self) -> bool: ...
    def request_access_token(self, *, consent: bool) -> None: ...
    def revoke_token(self) -> None: ...

    def insert_event(self, calendar_id: str, event: CalendarEvent) -> Awaitable[dict[str, Any]]: ...


class ConsoleIO(Protocol):
    """What command handlers may use to talk back to the user mid-command."""

    def emit(self, text: str) -> None: ...
    def confirm(self, prompt: str) -> bool: ...
