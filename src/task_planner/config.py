# src/task_planner/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time (Google client secrets are read lazily).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "PLANNER"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_path: Path
    storage_key: str

    # ---- Google Calendar ----
    calendar_enabled: bool
    google_client_secrets_path: Path
    calendar_id: str
    calendar_timezone: str
    event_start_hour: int
    event_duration_minutes: int
    oauth_local_port: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-planner").strip() or "task-planner"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task_planner"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "storage.sqlite3")
        storage_key = _env(_k("STORAGE_KEY"), "tasks").strip() or "tasks"

        calendar_enabled = _env_bool(_k("CALENDAR_ENABLED"), True)
        google_client_secrets_path = _env_path(
            _k("GOOGLE_CLIENT_SECRETS"), data_dir / "client_secret.json"
        )
        calendar_id = _env(_k("CALENDAR_ID"), "primary").strip() or "primary"
        calendar_timezone = _env(_k("CALENDAR_TIMEZONE"), "Asia/Kolkata").strip() or "Asia/Kolkata"

        # clamp to something Google will accept as a same-day block
        event_start_hour = min(23, max(0, _env_int(_k("EVENT_START_HOUR"), 9)))
        event_duration_minutes = max(1, _env_int(_k("EVENT_DURATION_MINUTES"), 60))

        # 0 => let the OS pick a free port for the OAuth redirect listener
        oauth_local_port = max(0, _env_int(_k("OAUTH_LOCAL_PORT"), 0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_path=storage_path,
            storage_key=storage_key,
            calendar_enabled=calendar_enabled,
            google_client_secrets_path=google_client_secrets_path,
            calendar_id=calendar_id,
            calendar_timezone=calendar_timezone,
            event_start_hour=event_start_hour,
            event_duration_minutes=event_duration_minutes,
            oauth_local_port=oauth_local_port,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
