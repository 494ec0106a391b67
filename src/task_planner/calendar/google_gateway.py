# src/task_planner/calendar/google_gateway.py

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import requests
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build_from_document
from googleapiclient.discovery_cache import get_static_doc

from ..core.ports import CalendarEvent

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar.events"]
REVOKE_URL = "https://oauth2.googleapis.com/revoke"


class GoogleCalendarGateway:
    """
    CalendarGateway backed by the Google API client + installed-app OAuth flow.

    - API client: the bundled calendar v3 discovery document (no network needed).
    - Identity: OAuth client config from the downloaded client_secret.json.
    - The access token lives in memory only; every run asks again.

    IMPORTANT:
    - No secrets are read at import time, only in load_identity().
    - insert_event runs the blocking HTTP call in a worker thread; callers
      await one call at a time.
    """

    def __init__(
        self,
        client_secrets_path: str | Path,
        *,
        local_port: int = 0,
        revoke_timeout: float = 10.0,
    ) -> None:
        self._client_secrets_path = Path(client_secrets_path).expanduser()
        self._local_port = int(local_port)
        self._revoke_timeout = float(revoke_timeout)

        self._discovery_doc: str | None = None
        self._client_config: dict[str, Any] | None = None
        self._credentials: Credentials | None = None
        self._service: Any = None

    # ---- library loading ----

    def load_api_client(self) -> None:
        doc = get_static_doc("calendar", "v3")
        if not doc:
            raise RuntimeError("Calendar v3 discovery document is not bundled with googleapiclient.")
        self._discovery_doc = doc
        logger.debug("Loaded calendar v3 discovery document (%d bytes)", len(doc))

    def load_identity(self) -> None:
        path = self._client_secrets_path
        if not path.is_file():
            raise FileNotFoundError(f"Google client secrets not found: {path}")

        config = json.loads(path.read_text("utf-8"))
        if not isinstance(config, dict) or not ({"installed", "web"} & config.keys()):
            raise ValueError(f"Not an OAuth client secrets file: {path}")

        # Building a flow validates the config shape the same way authorization will.
        InstalledAppFlow.from_client_config(config, scopes=SCOPES)
        self._client_config = config
        logger.debug("Loaded OAuth client config from %s", path)

    # ---- token handling ----

    def has_token(self) -> bool:
        return self._credentials is not None

    def request_access_token(self, *, consent: bool) -> None:
        if self._discovery_doc is None or self._client_config is None:
            raise RuntimeError("Calendar libraries are not loaded.")

        creds = self._credentials
        if creds is not None and creds.expired and creds.refresh_token:
            logger.info("Refreshing Google access token")
            creds.refresh(Request())
        elif creds is None or not creds.valid:
            flow = InstalledAppFlow.from_client_config(self._client_config, scopes=SCOPES)
            extra: dict[str, str] = {"prompt": "consent"} if consent else {}
            creds = flow.run_local_server(port=self._local_port, open_browser=True, **extra)

        self._credentials = creds
        self._service = build_from_document(self._discovery_doc, credentials=creds)
        logger.info("Google Calendar authorized (scopes=%s)", ",".join(SCOPES))

    def revoke_token(self) -> None:
        creds = self._credentials
        if creds is None:
            return
        try:
            resp = requests.post(
                REVOKE_URL,
                params={"token": creds.token},
                headers={"content-type": "application/x-www-form-urlencoded"},
                timeout=self._revoke_timeout,
            )
            if resp.status_code != 200:
                logger.warning("Token revoke returned HTTP %s", resp.status_code)
        finally:
            self._credentials = None
            self._service = None

    # ---- events ----

    async def insert_event(self, calendar_id: str, event: CalendarEvent) -> dict[str, Any]:
        if self._service is None:
            raise RuntimeError("Google Calendar is not authorized.")
        request = self._service.events().insert(calendarId=calendar_id, body=event)
        return await asyncio.to_thread(request.execute)
