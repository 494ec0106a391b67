# src/task_planner/tasks/task_store.py

from __future__ import annotations

import json
import logging
import time
from datetime import date
from pathlib import Path
from typing import Any

from .local_storage import LocalStorage
from .task_models import Priority, Task, TaskStatus, parse_due_date, utc_now

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class TaskStore:
    """
    Task collection persisted as ONE JSON array under a single storage key.

    Every mutation loads the current blob, applies the change and rewrites the
    whole array. Collection order is insertion order; display order is the
    view pipeline's business.
    """

    def __init__(self, storage: LocalStorage | str | Path, *, key: str = "tasks") -> None:
        if not isinstance(storage, LocalStorage):
            storage = LocalStorage(storage)
        self._storage = storage
        self._key = key
        logger.info("TaskStore ready key=%s total=%s", self._key, self.count())

    # ---- low-level helpers ----

    def _read_records(self) -> list[dict[str, Any]]:
        raw = self._storage.get_item(self._key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.exception("Stored task blob is not valid JSON; treating as empty.")
            return []
        if not isinstance(data, list):
            logger.warning("Stored task blob is not a list (%s); treating as empty.", type(data).__name__)
            return []
        return [r for r in data if isinstance(r, dict)]

    def _write(self, tasks: list[Task]) -> None:
        blob = json.dumps([t.to_record() for t in tasks], ensure_ascii=False)
        self._storage.set_item(self._key, blob)
        logger.debug("TaskStore persisted total=%s", len(tasks))

    @staticmethod
    def _new_id(tasks: list[Task]) -> int:
        tid = int(time.time() * 1000)
        existing = {t.id for t in tasks}
        if tid in existing:
            tid = max(existing) + 1
        return tid

    @staticmethod
    def _clean_title(title: str | None) -> str:
        cleaned = (title or "").strip()
        if not cleaned:
            raise ValueError("title is required")
        return cleaned

    # ---- public API ----

    def load(self) -> list[Task]:
        out: list[Task] = []
        seen: set[int] = set()
        for raw in self._read_records():
            task = Task.from_record(raw)
            if task is None:
                logger.warning("Skipping unreadable task record: %r", raw)
                continue
            if task.id in seen:
                logger.warning("Skipping duplicate task id=%s", task.id)
                continue
            seen.add(task.id)
            out.append(task)
        return out

    def get(self, task_id: int) -> Task | None:
        for t in self.load():
            if t.id == task_id:
                return t
        return None

    def count(self) -> int:
        return len(self.load())

    def tasks_with_due_date(self) -> list[Task]:
        return [t for t in self.load() if t.due_date is not None]

    def add(
        self,
        *,
        title: str,
        priority: Priority | str = Priority.MEDIUM,
        size: str = "medium",
        due_date: date | str | None = None,
        status: TaskStatus | str = TaskStatus.TODO,
    ) -> Task:
        cleaned = self._clean_title(title)

        tasks = self.load()
        task = Task(
            id=self._new_id(tasks),
            title=cleaned,
            priority=Priority(priority),
            size=(size or "medium").strip() or "medium",
            due_date=parse_due_date(due_date),
            status=TaskStatus(status),
            created_at=utc_now(),
        )
        tasks.append(task)
        self._write(tasks)
        logger.info("Task added id=%s title=%r", task.id, task.title)
        return task

    def update(
        self,
        task_id: int,
        *,
        title: str | None = None,
        priority: Priority | str | None = None,
        size: str | None = None,
        due_date: Any = _UNSET,
        status: TaskStatus | str | None = None,
    ) -> Task | None:
        """
        Replace only the supplied fields of one task.

        `due_date=None` clears the date; leaving it out keeps the old one.
        Returns None (and writes nothing) when the id no longer exists.
        """
        cleaned = self._clean_title(title) if title is not None else None

        tasks = self.load()
        for task in tasks:
            if task.id == task_id:
                break
        else:
            logger.debug("Update skipped: task id=%s not found", task_id)
            return None

        if cleaned is not None:
            task.title = cleaned
        if priority is not None:
            task.priority = Priority(priority)
        if size is not None:
            task.size = size.strip() or task.size
        if due_date is not _UNSET:
            task.due_date = parse_due_date(due_date)
        if status is not None:
            task.status = TaskStatus(status)

        # Never move updated_at backwards, even if the wall clock does.
        task.updated_at = max(utc_now(), task.updated_at or task.created_at)

        self._write(tasks)
        logger.info("Task updated id=%s", task.id)
        return task

    def delete(self, task_id: int) -> bool:
        tasks = self.load()
        kept = [t for t in tasks if t.id != task_id]
        if len(kept) == len(tasks):
            logger.debug("Delete skipped: task id=%s not found", task_id)
            return False
        self._write(kept)
        logger.info("Task deleted id=%s", task_id)
        return True
