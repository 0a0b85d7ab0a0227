from __future__ import annotations

import logging
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from clinic_admin.auth import SessionManager
from clinic_admin.logger import StructuredLogger
from clinic_admin.models.auth_models import AuthErrorCode, SessionState
from clinic_admin.services.auth_service import (
    OFFLINE_MESSAGE,
    SIGN_IN_FALLBACK,
    SIGN_OUT_FALLBACK,
    AuthService,
    AuthSubscription,
)
from factories import FakeServiceError, make_session


def test_login_normalises_email_and_records_session(
    auth_service: AuthService, client: MagicMock, session: SessionManager,
) -> None:
    client.auth.sign_in_with_password.return_value = SimpleNamespace(
        session=make_session("op-9", "admin@clinic.com"),
        user=SimpleNamespace(id="op-9"),
    )

    result = auth_service.login("  Admin@Clinic.com ", "pw")

    assert result.success
    assert result.user_id == "op-9"
    client.auth.sign_in_with_password.assert_called_once_with(
        {"email": "admin@clinic.com", "password": "pw"},
    )
    assert session.current_user_id == "op-9"
    assert session.is_authenticated


@pytest.mark.parametrize(
    ("email", "password", "message"),
    [
        ("", "pw", "Email address is required."),
        ("nope", "pw", "Please enter a valid email address."),
        ("a@clinic.com", "", "Password is required."),
    ],
)
def test_login_validates_before_calling_service(
    auth_service: AuthService, client: MagicMock, email: str, password: str, message: str,
) -> None:
    result = auth_service.login(email, password)

    assert not result.success
    assert result.error_code == AuthErrorCode.VALIDATION_ERROR
    assert result.error_message == message
    client.auth.sign_in_with_password.assert_not_called()


def test_login_failure_surfaces_service_message(
    auth_service: AuthService, client: MagicMock, session: SessionManager,
) -> None:
    client.auth.sign_in_with_password.side_effect = FakeServiceError("Invalid login credentials")

    result = auth_service.login("a@clinic.com", "wrong")

    assert not result.success
    assert result.error_message == "Invalid login credentials"
    assert result.error_code == AuthErrorCode.INVALID_CREDENTIALS
    assert not session.is_authenticated


def test_login_failure_without_message_uses_fallback(
    auth_service: AuthService, client: MagicMock,
) -> None:
    client.auth.sign_in_with_password.side_effect = FakeServiceError("")

    result = auth_service.login("a@clinic.com", "pw")

    assert result.error_message == SIGN_IN_FALLBACK


def test_login_without_session_in_response_fails(
    auth_service: AuthService, client: MagicMock,
) -> None:
    client.auth.sign_in_with_password.return_value = SimpleNamespace(session=None, user=None)

    result = auth_service.login("a@clinic.com", "pw")

    assert not result.success
    assert result.error_message == SIGN_IN_FALLBACK


def test_network_errors_are_categorised(auth_service: AuthService, client: MagicMock) -> None:
    client.auth.sign_in_with_password.side_effect = ConnectionError("connection refused")

    result = auth_service.login("a@clinic.com", "pw")

    assert result.error_code == AuthErrorCode.NETWORK_ERROR
    assert result.error_message == "connection refused"


def test_sign_up_maps_duplicate_email(auth_service: AuthService, client: MagicMock) -> None:
    client.auth.sign_up.side_effect = FakeServiceError("User already registered")

    result = auth_service.sign_up("dup@clinic.com", "secret1")

    assert result.error_code == AuthErrorCode.EMAIL_ALREADY_EXISTS
    assert result.error_message == "User already registered"


def test_sign_up_without_identity_succeeds_with_no_id(
    auth_service: AuthService, client: MagicMock,
) -> None:
    client.auth.sign_up.return_value = SimpleNamespace(user=None, session=None)

    result = auth_service.sign_up("new@clinic.com", "secret1")

    assert result.success
    assert result.user_id is None


def test_logout_clears_local_session_and_audits(
    auth_service: AuthService,
    client: MagicMock,
    session: SessionManager,
    caplog: pytest.LogCaptureFixture,
) -> None:
    session.set_session(SessionState(user_id="op-1", access_token="t"))
    caplog.set_level(logging.INFO)

    result = auth_service.logout()

    assert result.success
    client.auth.sign_out.assert_called_once()
    assert not session.is_authenticated
    assert any('"action": "LOGOUT"' in r.getMessage() for r in caplog.records)


def test_logout_failure_still_clears_local_state(
    auth_service: AuthService, client: MagicMock, session: SessionManager,
) -> None:
    session.set_session(SessionState(user_id="op-1", access_token="t"))
    client.auth.sign_out.side_effect = FakeServiceError("")

    result = auth_service.logout()

    assert not result.success
    assert result.error_message == SIGN_OUT_FALLBACK
    assert not session.is_authenticated


def test_current_session_mirrors_service_state(
    auth_service: AuthService, client: MagicMock, session: SessionManager,
) -> None:
    state = auth_service.current_session()
    assert state is not None
    assert state.user_id == "op-1"
    assert session.current_email == "admin@clinic.com"

    client.auth.get_session.return_value = None
    assert auth_service.current_session() is None
    assert not session.is_authenticated


def test_subscribe_converts_sessions_and_tracks_sign_out(
    auth_service: AuthService, client: MagicMock, session: SessionManager,
) -> None:
    received: list[tuple[str, object]] = []
    subscription = auth_service.subscribe(lambda event, state: received.append((event, state)))
    callback = client.auth.on_auth_state_change.call_args.args[0]

    callback("SIGNED_IN", make_session("op-2"))
    callback("SIGNED_OUT", None)

    assert received[0][0] == "SIGNED_IN"
    assert isinstance(received[0][1], SessionState)
    assert received[1] == ("SIGNED_OUT", None)
    assert not session.is_authenticated
    assert subscription.active


def test_subscription_unsubscribe_is_idempotent() -> None:
    inner = MagicMock()
    subscription = AuthSubscription(inner=inner)

    subscription.unsubscribe()
    subscription.unsubscribe()

    inner.unsubscribe.assert_called_once()
    assert not subscription.active


def test_subscription_tolerates_unsubscribe_errors(logger: StructuredLogger) -> None:
    inner = MagicMock()
    inner.unsubscribe.side_effect = RuntimeError("already closed")
    subscription = AuthSubscription(inner=inner, logger=logger)

    subscription.unsubscribe()

    assert not subscription.active


def test_offline_service_reports_unavailable(
    offline_gateway, session: SessionManager, logger: StructuredLogger,
) -> None:
    auth = AuthService(gateway=offline_gateway, session=session, logger=logger)

    assert auth.login("a@clinic.com", "pw").error_code == AuthErrorCode.OFFLINE
    assert auth.login("a@clinic.com", "pw").error_message == OFFLINE_MESSAGE
    assert auth.current_session() is None
    assert auth.logout().success
    subscription = auth.subscribe(lambda event, state: None)
    subscription.unsubscribe()
    assert not subscription.active


def test_client_runtime_error_is_not_reported_as_offline(
    auth_service: AuthService, client: MagicMock, session: SessionManager,
) -> None:
    client.auth.sign_in_with_password.side_effect = RuntimeError("event loop is closed")
    client.auth.sign_out.side_effect = RuntimeError("event loop is closed")
    session.set_session(SessionState(user_id="op-1", access_token="t"))

    result = auth_service.login("a@clinic.com", "pw")
    assert result.error_code == AuthErrorCode.UNKNOWN_ERROR
    assert result.error_message == "event loop is closed"

    signed_out = auth_service.logout()
    assert not signed_out.success
    assert signed_out.error_message == "event loop is closed"
    assert not session.is_authenticated
