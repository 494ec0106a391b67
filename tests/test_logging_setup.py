# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from task_planner.logging_setup import LOG_FILE_NAME, _ConsoleNoiseFilter, console_floor, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_floor_prefers_longest_prefix() -> None:
    assert console_floor("task_planner.tasks.task_store") == logging.DEBUG
    assert console_floor("task_planner.calendar.google_gateway") == logging.WARNING
    assert console_floor("py.warnings") == logging.ERROR
    assert console_floor("googleapiclient.discovery") == logging.ERROR


def test_console_filter_hides_library_chatter() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("task_planner.calendar.sync", logging.INFO))
    assert not f.filter(_record("task_planner.calendar.google_gateway", logging.INFO))
    assert f.filter(_record("task_planner.calendar.google_gateway", logging.WARNING))
    assert not f.filter(_record("urllib3.connectionpool", logging.WARNING))


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler) or any(isinstance(f, _ConsoleNoiseFilter) for f in h.filters):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_file_and_accepts_level_names(tmp_path: Path, restore_root_logging) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs", console_level="warning")
    setup_logging(log_dir=tmp_path / "logs", console_level="warning")

    assert log_file == tmp_path / "logs" / LOG_FILE_NAME
    root = logging.getLogger()
    assert len(root.handlers) == 2
    console = next(h for h in root.handlers if not isinstance(h, logging.FileHandler))
    assert console.level == logging.WARNING

    logging.getLogger("task_planner.test").debug("debug line for the file")
    for h in root.handlers:
        h.flush()
    assert "debug line for the file" in log_file.read_text("utf-8")
