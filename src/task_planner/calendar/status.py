# src/task_planner/calendar/status.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class StatusLevel(StrEnum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class StatusMessage:
    """User-facing calendar status line. All external failures end up here as text."""

    text: str
    level: StatusLevel = StatusLevel.INFO

    def render(self) -> str:
        return f"[CALENDAR][{self.level.value.upper()}] {self.text}"
