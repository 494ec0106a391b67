# src/task_planner/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import StrEnum
from typing import Any


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def from_raw(cls, raw: Any) -> Priority:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.MEDIUM


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    The values double as the persisted form and the filter keys, so
    "in-progress" keeps its hyphen.
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def from_raw(cls, raw: Any) -> TaskStatus:
        if not raw:
            return cls.TODO
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.TODO


def utc_now() -> datetime:
    """Current UTC time, truncated to the millisecond precision we persist."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def format_timestamp(ts: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing Z."""
    ts = ts.astimezone(timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"


def parse_timestamp(raw: Any) -> datetime | None:
    if not raw or not isinstance(raw, str):
        return None
    try:
        ts = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def parse_due_date(raw: Any) -> date | None:
    """Accept YYYY-MM-DD; empty/invalid input means "no date"."""
    if raw is None:
        return None
    if isinstance(raw, date):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


@dataclass(slots=True)
class Task:
    id: int
    title: str
    priority: Priority
    size: str
    due_date: date | None
    status: TaskStatus
    created_at: datetime
    updated_at: datetime | None = None

    def to_record(self) -> dict[str, Any]:
        """Serialize with the persisted (camelCase) keys."""
        return {
            "id": self.id,
            "title": self.title,
            "priority": self.priority.value,
            "size": self.size,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "status": self.status.value,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at) if self.updated_at else None,
        }

    @classmethod
    def from_record(cls, raw: dict[str, Any]) -> Task | None:
        """Inverse of to_record. Returns None for records that cannot be salvaged."""
        tid = raw.get("id")
        if isinstance(tid, bool) or not isinstance(tid, int):
            return None
        title = str(raw.get("title") or "").strip()
        if not title:
            return None

        created_at = parse_timestamp(raw.get("createdAt"))
        if created_at is None:
            # ids are creation timestamps in ms
            try:
                created_at = datetime.fromtimestamp(tid // 1000, tz=timezone.utc)
                created_at += timedelta(milliseconds=tid % 1000)
            except (OverflowError, OSError, ValueError):
                return None

        return cls(
            id=tid,
            title=title,
            priority=Priority.from_raw(raw.get("priority")),
            size=str(raw.get("size") or "medium"),
            due_date=parse_due_date(raw.get("dueDate")),
            status=TaskStatus.from_raw(raw.get("status")),
            created_at=created_at,
            updated_at=parse_timestamp(raw.get("updatedAt")),
        )
