# tests/test_calendar_auth.py

from __future__ import annotations

import pytest

from task_planner.calendar.auth import (
    ApiClientLoaded,
    AuthorizationDenied,
    AuthorizationGranted,
    AuthorizationRequested,
    AuthPhase,
    AuthStateMachine,
    IdentityLoaded,
    InvalidTransition,
    Library,
    LibraryLoadFailed,
    LoadStarted,
    SignedOut,
)
from task_planner.calendar.exporter import CalendarExporter
from task_planner.calendar.status import StatusLevel

from .fakes import FakeCalendarGateway


def _ready_machine() -> AuthStateMachine:
    m = AuthStateMachine()
    m.dispatch(LoadStarted())
    m.dispatch(IdentityLoaded())
    m.dispatch(ApiClientLoaded())
    return m


def test_ready_needs_both_libraries() -> None:
    m = AuthStateMachine()
    assert m.phase is AuthPhase.UNINITIALIZED

    m.dispatch(LoadStarted())
    assert m.phase is AuthPhase.LIBRARIES_LOADING

    m.dispatch(ApiClientLoaded())
    assert m.phase is AuthPhase.LIBRARIES_LOADING
    assert not m.can_connect

    m.dispatch(IdentityLoaded())
    assert m.phase is AuthPhase.READY
    assert m.can_connect
    assert m.status is not None and m.status.text == "Ready to connect to Google Calendar"


def test_load_failure_keeps_connect_disabled() -> None:
    m = AuthStateMachine()
    m.dispatch(LoadStarted())
    m.dispatch(ApiClientLoaded())
    m.dispatch(LibraryLoadFailed(Library.IDENTITY, "missing file"))

    assert m.phase is AuthPhase.LIBRARIES_LOADING
    assert not m.can_connect
    assert m.status is not None and m.status.level is StatusLevel.ERROR
    with pytest.raises(InvalidTransition):
        m.dispatch(AuthorizationRequested())


def test_authorize_sign_out_cycle() -> None:
    m = _ready_machine()
    m.dispatch(AuthorizationRequested())
    assert m.phase is AuthPhase.AUTH_REQUESTED
    m.dispatch(AuthorizationGranted())
    assert m.phase is AuthPhase.AUTHORIZED
    assert m.can_sync

    m.dispatch(SignedOut())
    assert m.phase is AuthPhase.READY
    assert not m.can_sync


def test_denied_then_manual_retry() -> None:
    m = _ready_machine()
    m.dispatch(AuthorizationRequested())
    m.dispatch(AuthorizationDenied("access_denied"))
    assert m.phase is AuthPhase.AUTH_FAILED
    assert m.status is not None and m.status.text == "Authorization failed: access_denied"

    m.dispatch(AuthorizationRequested())
    assert m.phase is AuthPhase.AUTH_REQUESTED


def test_invalid_transitions_raise() -> None:
    m = AuthStateMachine()
    with pytest.raises(InvalidTransition):
        m.dispatch(AuthorizationGranted())
    with pytest.raises(InvalidTransition):
        _ready_machine().dispatch(SignedOut())


def test_exporter_initialize_connect_sign_out() -> None:
    gw = FakeCalendarGateway()
    exporter = CalendarExporter(gw)

    assert exporter.initialize().text == "Ready to connect to Google Calendar"
    assert exporter.phase is AuthPhase.READY

    status = exporter.connect()
    assert exporter.phase is AuthPhase.AUTHORIZED
    assert status.level is StatusLevel.SUCCESS
    assert gw.consent_requests == [True]

    status = exporter.sign_out()
    assert status.text == "Signed out successfully"
    assert gw.revoked == 1
    assert exporter.phase is AuthPhase.READY


def test_exporter_identity_failure_blocks_connect() -> None:
    gw = FakeCalendarGateway(fail_identity_load=True)
    exporter = CalendarExporter(gw)

    status = exporter.initialize()
    assert status.level is StatusLevel.ERROR
    assert "auth services" in status.text

    status = exporter.connect()
    assert status.level is StatusLevel.WARNING
    assert gw.consent_requests == []


def test_exporter_denied_authorization_reports_reason() -> None:
    gw = FakeCalendarGateway(deny_reason="popup_closed")
    exporter = CalendarExporter(gw)
    exporter.initialize()

    status = exporter.connect()
    assert exporter.phase is AuthPhase.AUTH_FAILED
    assert status.text == "Authorization failed: popup_closed"
    assert status.level is StatusLevel.ERROR


def test_exporter_api_client_failure_blocks_connect() -> None:
    gw = FakeCalendarGateway(fail_api_load=True)
    exporter = CalendarExporter(gw)

    status = exporter.initialize()
    assert exporter.phase is AuthPhase.LIBRARIES_LOADING
    assert status.level is StatusLevel.ERROR
    assert status.text == "Failed to load Google API. Check the log."

    # identity loaded fine, but the failure is what the user keeps seeing
    assert exporter.auth.identity_ready
    assert not exporter.auth.api_ready
    assert exporter.connect().level is StatusLevel.WARNING
    assert gw.consent_requests == []


def test_sign_out_completes_when_revoke_fails() -> None:
    gw = FakeCalendarGateway(fail_revoke=True)
    exporter = CalendarExporter(gw)
    exporter.initialize()
    exporter.connect()

    status = exporter.sign_out()
    assert status.text == "Signed out successfully"
    assert exporter.phase is AuthPhase.READY
    assert gw.revoked == 1
    assert not gw.has_token()


def test_reconnect_after_sign_out_asks_for_consent_again() -> None:
    gw = FakeCalendarGateway()
    exporter = CalendarExporter(gw)
    exporter.initialize()

    exporter.connect()
    exporter.sign_out()
    exporter.connect()

    assert gw.consent_requests == [True, True]
    assert exporter.phase is AuthPhase.AUTHORIZED
