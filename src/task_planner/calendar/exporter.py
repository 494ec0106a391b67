# src/task_planner/calendar/exporter.py

from __future__ import annotations

import logging

from ..core.ports import CalendarGateway
from ..tasks.task_store import TaskStore
from .auth import (
    ApiClientLoaded,
    AuthorizationDenied,
    AuthorizationGranted,
    AuthorizationRequested,
    AuthPhase,
    AuthStateMachine,
    IdentityLoaded,
    Library,
    LibraryLoadFailed,
    LoadStarted,
    SignedOut,
)
from .status import StatusLevel, StatusMessage
from .sync import SyncReport, sync_tasks_to_calendar

logger = logging.getLogger(__name__)


class CalendarExporter:
    """
    Drives the auth state machine against a CalendarGateway and runs sync.

    Every public method returns the StatusMessage to show the user; nothing
    here raises for external failures.
    """

    def __init__(
        self,
        gateway: CalendarGateway,
        *,
        calendar_id: str = "primary",
        timezone: str = "Asia/Kolkata",
        start_hour: int = 9,
        duration_minutes: int = 60,
    ) -> None:
        self.gateway = gateway
        self.auth = AuthStateMachine()
        self.calendar_id = calendar_id
        self.timezone = timezone
        self.start_hour = start_hour
        self.duration_minutes = duration_minutes

    @classmethod
    def from_settings(cls, gateway: CalendarGateway, settings) -> CalendarExporter:
        return cls(
            gateway,
            calendar_id=getattr(settings, "calendar_id", "primary"),
            timezone=getattr(settings, "calendar_timezone", "Asia/Kolkata"),
            start_hour=int(getattr(settings, "event_start_hour", 9)),
            duration_minutes=int(getattr(settings, "event_duration_minutes", 60)),
        )

    @property
    def phase(self) -> AuthPhase:
        return self.auth.phase

    @property
    def status(self) -> StatusMessage:
        if self.auth.status is not None:
            return self.auth.status
        return StatusMessage(f"Calendar is {self.auth.phase.value}.", StatusLevel.INFO)

    def initialize(self) -> StatusMessage:
        """Load both client libraries; each reports ready (or failed) on its own."""
        if self.auth.phase != AuthPhase.UNINITIALIZED:
            return self.status

        self.auth.dispatch(LoadStarted())

        try:
            self.gateway.load_api_client()
        except Exception as e:
            logger.exception("Calendar API client failed to load.")
            self.auth.dispatch(LibraryLoadFailed(Library.API_CLIENT, str(e)))
        else:
            logger.info("Calendar API client initialized")
            self.auth.dispatch(ApiClientLoaded())

        try:
            self.gateway.load_identity()
        except Exception as e:
            logger.exception("Calendar identity client failed to load.")
            self.auth.dispatch(LibraryLoadFailed(Library.IDENTITY, str(e)))
        else:
            logger.info("Calendar identity client initialized")
            self.auth.dispatch(IdentityLoaded())

        return self.status

    def connect(self) -> StatusMessage:
        if self.auth.phase == AuthPhase.AUTHORIZED:
            return StatusMessage("Already connected. Run /sync or /signout.", StatusLevel.INFO)
        if not self.auth.can_connect:
            return StatusMessage(
                f"Calendar is not ready to connect (state: {self.auth.phase.value}).",
                StatusLevel.WARNING,
            )

        self.auth.dispatch(AuthorizationRequested())
        try:
            # First-time connect asks for consent; afterwards reuse the held grant.
            self.gateway.request_access_token(consent=not self.gateway.has_token())
        except Exception as e:
            logger.exception("Calendar authorization failed.")
            reason = str(e).strip() or type(e).__name__
            self.auth.dispatch(AuthorizationDenied(reason))
        else:
            self.auth.dispatch(AuthorizationGranted())
        return self.status

    def sign_out(self) -> StatusMessage:
        if not self.auth.can_sign_out or not self.gateway.has_token():
            return StatusMessage("Not connected.", StatusLevel.INFO)

        try:
            self.gateway.revoke_token()
        except Exception:
            # The local token is dropped regardless; Google expires it eventually.
            logger.exception("Token revoke failed.")
        self.auth.dispatch(SignedOut())
        return self.status

    async def sync(self, store: TaskStore) -> SyncReport:
        if not self.auth.can_sync:
            return SyncReport(
                0,
                0,
                StatusMessage("Connect to Google Calendar first (/connect).", StatusLevel.ERROR),
            )

        tasks = store.tasks_with_due_date()
        report = await sync_tasks_to_calendar(
            tasks,
            self.gateway,
            calendar_id=self.calendar_id,
            timezone=self.timezone,
            start_hour=self.start_hour,
            duration_minutes=self.duration_minutes,
        )
        return report
