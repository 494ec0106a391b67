# src/task_planner/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "planner.log"

# Console floor per logger prefix; the longest matching prefix wins.
# Anything not listed (third-party libraries) only reaches the console at ERROR.
_CONSOLE_FLOORS: dict[str, int] = {
    "task_planner.": logging.DEBUG,
    # one line per HTTP round-trip; the file keeps them
    "task_planner.calendar.google_gateway": logging.WARNING,
    "py.warnings": logging.ERROR,
}

# Library loggers capped for both handlers.
_LIBRARY_LEVELS: dict[str, int] = {
    # warns about the missing oauth2client cache on every build
    "googleapiclient.discovery_cache": logging.ERROR,
    "googleapiclient": logging.INFO,
    "google_auth_oauthlib": logging.INFO,
    "urllib3": logging.WARNING,
}


def console_floor(logger_name: str) -> int:
    best, floor = "", logging.ERROR
    for prefix, level in _CONSOLE_FLOORS.items():
        if logger_name.startswith(prefix) and len(prefix) > len(best):
            best, floor = prefix, level
    return floor


class _ConsoleNoiseFilter(logging.Filter):
    """Keeps the REPL readable: planner logs pass, library chatter waits for errors."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= console_floor(record.name)


def setup_logging(
    *,
    log_dir: str | Path = ".local/task_planner",
    console_level: int | str = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Console handler (filtered, stderr) plus a full debug log in `log_dir`.

    `console_level` may be a level name such as "DEBUG". Existing root
    handlers are replaced, so calling it twice does not duplicate output.
    Returns the log file path.
    """
    if isinstance(console_level, str):
        console_level = logging.getLevelName(console_level.upper())
        if not isinstance(console_level, int):
            console_level = logging.INFO

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
        if isinstance(h, logging.FileHandler):
            h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())

    logfile = logging.FileHandler(str(log_file), encoding="utf-8")
    logfile.setLevel(file_level)
    logfile.setFormatter(fmt)

    root.addHandler(console)
    root.addHandler(logfile)

    logging.captureWarnings(True)
    for name, level in _LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(level)

    return log_file
