# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Keep the Google OAuth client_secret.json under the
gitignored data dir (or point PLANNER_GOOGLE_CLIENT_SECRETS at it).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "PLANNER_APP_NAME": "App display name (default: task-planner).",
    "PLANNER_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths (gitignored)
    "PLANNER_DATA_DIR": "Local data directory (default: .local/task_planner).",
    "PLANNER_STORAGE_PATH": "Key-value SQLite path (default: <data_dir>/storage.sqlite3).",
    "PLANNER_STORAGE_KEY": "Key holding the task list blob (default: tasks).",
    # Google Calendar
    "PLANNER_CALENDAR_ENABLED": "Enable calendar export commands (true/false, default: true).",
    "PLANNER_GOOGLE_CLIENT_SECRETS": (
        "OAuth desktop-app client secrets JSON (default: <data_dir>/client_secret.json)."
    ),
    "PLANNER_CALENDAR_ID": "Target calendar id (default: primary).",
    "PLANNER_CALENDAR_TIMEZONE": "Timezone of exported events (default: Asia/Kolkata).",
    "PLANNER_EVENT_START_HOUR": "Local hour the event starts on its due date (default: 9).",
    "PLANNER_EVENT_DURATION_MINUTES": "Event length in minutes (default: 60).",
    "PLANNER_OAUTH_LOCAL_PORT": "Port for the OAuth redirect listener (default: 0 = any free port).",
}
