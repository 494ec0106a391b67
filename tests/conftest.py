# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_planner.cli.bootstrap import create_initial_state
from task_planner.core.state import AppState
from task_planner.tasks.task_store import TaskStore

from .fakes import FakeCalendarGateway


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="task-planner-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        storage_path=tmp_path / "storage.sqlite3",
        storage_key="tasks",
        calendar_enabled=True,
        google_client_secrets_path=tmp_path / "client_secret.json",
        calendar_id="primary",
        calendar_timezone="Asia/Kolkata",
        event_start_hour=9,
        event_duration_minutes=60,
        oauth_local_port=0,
    )


@pytest.fixture()
def gateway() -> FakeCalendarGateway:
    return FakeCalendarGateway()


@pytest.fixture()
def state(settings: SimpleNamespace, gateway: FakeCalendarGateway) -> AppState:
    """
    AppState wired with a fake calendar gateway.

    NOTE: We keep the real SQLite-backed TaskStore here because its
    correctness is part of what we want to test.
    """
    return create_initial_state(settings=settings, gateway=gateway)


@pytest.fixture()
def store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path / "store.sqlite3")
