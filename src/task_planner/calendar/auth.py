# src/task_planner/calendar/auth.py

from __future__ import annotations

"""
Calendar authorization state machine.

    uninitialized --LoadStarted--> libraries_loading
    libraries_loading --ApiClientLoaded & IdentityLoaded--> ready
    ready | auth_failed --AuthorizationRequested--> auth_requested
    auth_requested --AuthorizationGranted--> authorized
    auth_requested --AuthorizationDenied--> auth_failed
    authorized --SignedOut--> ready

A library load failure keeps the machine in libraries_loading (connect stays
disabled) and only changes the status line. Anything else raises InvalidTransition.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum

from .status import StatusLevel, StatusMessage

logger = logging.getLogger(__name__)


class AuthPhase(StrEnum):
    UNINITIALIZED = "uninitialized"
    LIBRARIES_LOADING = "libraries_loading"
    READY = "ready"
    AUTH_REQUESTED = "auth_requested"
    AUTHORIZED = "authorized"
    AUTH_FAILED = "auth_failed"


class Library(StrEnum):
    API_CLIENT = "api_client"
    IDENTITY = "identity"


# ---- events ----

@dataclass(frozen=True, slots=True)
class LoadStarted:
    pass


@dataclass(frozen=True, slots=True)
class ApiClientLoaded:
    pass


@dataclass(frozen=True, slots=True)
class IdentityLoaded:
    pass


@dataclass(frozen=True, slots=True)
class LibraryLoadFailed:
    library: Library
    reason: str = ""


@dataclass(frozen=True, slots=True)
class AuthorizationRequested:
    pass


@dataclass(frozen=True, slots=True)
class AuthorizationGranted:
    pass


@dataclass(frozen=True, slots=True)
class AuthorizationDenied:
    reason: str


@dataclass(frozen=True, slots=True)
class SignedOut:
    pass


AuthEvent = (
    LoadStarted
    | ApiClientLoaded
    | IdentityLoaded
    | LibraryLoadFailed
    | AuthorizationRequested
    | AuthorizationGranted
    | AuthorizationDenied
    | SignedOut
)


class InvalidTransition(RuntimeError):
    def __init__(self, phase: AuthPhase, event: AuthEvent) -> None:
        super().__init__(f"{type(event).__name__} is not valid in phase {phase.value}")
        self.phase = phase
        self.event = event


_LOAD_FAILED_TEXT: dict[Library, str] = {
    Library.API_CLIENT: "Failed to load Google API. Check the log.",
    Library.IDENTITY: "Failed to load auth services. Check client secrets.",
}


class AuthStateMachine:
    def __init__(self) -> None:
        self.phase: AuthPhase = AuthPhase.UNINITIALIZED
        self.api_ready = False
        self.identity_ready = False
        self.status: StatusMessage | None = None

    @property
    def can_connect(self) -> bool:
        return self.phase in (AuthPhase.READY, AuthPhase.AUTH_FAILED)

    @property
    def can_sync(self) -> bool:
        return self.phase == AuthPhase.AUTHORIZED

    @property
    def can_sign_out(self) -> bool:
        return self.phase == AuthPhase.AUTHORIZED

    def _move(self, new_phase: AuthPhase) -> None:
        if new_phase != self.phase:
            logger.info("Calendar auth: %s -> %s", self.phase.value, new_phase.value)
        self.phase = new_phase

    def dispatch(self, event: AuthEvent) -> AuthPhase:
        phase = self.phase

        if isinstance(event, LoadStarted) and phase == AuthPhase.UNINITIALIZED:
            self._move(AuthPhase.LIBRARIES_LOADING)

        elif isinstance(event, (ApiClientLoaded, IdentityLoaded)) and phase == AuthPhase.LIBRARIES_LOADING:
            if isinstance(event, ApiClientLoaded):
                self.api_ready = True
            else:
                self.identity_ready = True
            if self.api_ready and self.identity_ready:
                self._move(AuthPhase.READY)
                self.status = StatusMessage("Ready to connect to Google Calendar", StatusLevel.INFO)

        elif isinstance(event, LibraryLoadFailed) and phase == AuthPhase.LIBRARIES_LOADING:
            logger.error("Calendar %s failed to load: %s", event.library.value, event.reason)
            self.status = StatusMessage(_LOAD_FAILED_TEXT[event.library], StatusLevel.ERROR)

        elif isinstance(event, AuthorizationRequested) and self.can_connect:
            self._move(AuthPhase.AUTH_REQUESTED)

        elif isinstance(event, AuthorizationGranted) and phase == AuthPhase.AUTH_REQUESTED:
            self._move(AuthPhase.AUTHORIZED)
            self.status = StatusMessage(
                "Connected! Run /sync to export tasks to calendar.", StatusLevel.SUCCESS
            )

        elif isinstance(event, AuthorizationDenied) and phase == AuthPhase.AUTH_REQUESTED:
            self._move(AuthPhase.AUTH_FAILED)
            self.status = StatusMessage(f"Authorization failed: {event.reason}", StatusLevel.ERROR)

        elif isinstance(event, SignedOut) and phase == AuthPhase.AUTHORIZED:
            self._move(AuthPhase.READY)
            self.status = StatusMessage("Signed out successfully", StatusLevel.INFO)

        else:
            raise InvalidTransition(phase, event)

        return self.phase
