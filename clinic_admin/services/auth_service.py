"""
Authentication Service.

Single entry point for every identity-service concern: sign-in, sign-up,
sign-out, reading the current session and subscribing to session changes.

Sits between the UI layer and the Supabase auth client so that views
remain thin form handlers.  All methods return typed ``AuthResult`` /
``SessionState`` models; the UI never inspects raw exceptions.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional

from clinic_admin.auth import SessionManager
from clinic_admin.gateway import GatewayOfflineError, SupabaseGateway
from clinic_admin.logger import StructuredLogger
from clinic_admin.models.auth_models import (
    AuthErrorCode,
    AuthResult,
    SUPABASE_ERROR_CODES,
    SessionState,
    ValidationResult,
)
from clinic_admin.models.enums import AuthEvent
from clinic_admin.models.user import EMAIL_RE
from clinic_admin.utils.audit import log_audit_event
from clinic_admin.utils.errors import service_message

SIGN_IN_FALLBACK: str = "An error occurred during sign in."
SIGN_UP_FALLBACK: str = "Failed to create user"
SIGN_OUT_FALLBACK: str = "An error occurred while signing out."
OFFLINE_MESSAGE: str = (
    "Cannot reach the directory service. "
    "Check SUPABASE_URL and SUPABASE_ANON_KEY."
)

SessionListener = Callable[[str, Optional[SessionState]], None]


class AuthSubscription:
    """Handle for one session-change listener.

    ``unsubscribe()`` is idempotent and safe to call from any exit path.
    """

    def __init__(self, inner: Any = None, logger: Optional[StructuredLogger] = None) -> None:
        self._inner = inner
        self._logger = logger
        self._lock = threading.Lock()
        self._active: bool = True

    @property
    def active(self) -> bool:
        with self._lock:
            return self._active

    def unsubscribe(self) -> None:
        with self._lock:
            if not self._active:
                return
            self._active = False
            inner, self._inner = self._inner, None
        if inner is None:
            return
        try:
            inner.unsubscribe()
        except Exception as exc:
            if self._logger is not None:
                self._logger.warning("Auth listener unsubscribe failed: %s", exc)


class AuthService:
    """Centralised identity-service access.

    Parameters
    ----------
    gateway:
        Connection gateway holding the Supabase client.
    session:
        Local snapshot of the operator's session.
    logger:
        Structured JSON logger.
    """

    def __init__(
        self,
        gateway: SupabaseGateway,
        session: SessionManager,
        logger: StructuredLogger,
    ) -> None:
        self._gateway: SupabaseGateway = gateway
        self._session: SessionManager = session
        self._logger: StructuredLogger = logger

    # ==================================================================
    # Validation helpers
    # ==================================================================

    @staticmethod
    def validate_email(email: str) -> ValidationResult:
        """Check *email* against a simplified RFC 5322 pattern."""
        if not email or not email.strip():
            return ValidationResult(
                is_valid=False,
                error_message="Email address is required.",
            )
        if not EMAIL_RE.match(email.strip()):
            return ValidationResult(
                is_valid=False,
                error_message="Please enter a valid email address.",
            )
        return ValidationResult(is_valid=True)

    @staticmethod
    def normalize_email(email: str) -> str:
        """Strip whitespace and lowercase."""
        return email.strip().lower()

    # ==================================================================
    # Sign in
    # ==================================================================

    def login(self, email: str, password: str) -> AuthResult:
        """Sign the operator in with email and password.

        Returns
        -------
        AuthResult
            ``success=True`` with ``user_id`` set, or the identity
            service's message (``SIGN_IN_FALLBACK`` when it gave none).
        """
        email_check = self.validate_email(email)
        if not email_check.is_valid:
            return AuthResult(
                success=False,
                error_code=AuthErrorCode.VALIDATION_ERROR,
                error_message=email_check.error_message,
            )
        if not password:
            return AuthResult(
                success=False,
                error_code=AuthErrorCode.VALIDATION_ERROR,
                error_message="Password is required.",
            )

        email = self.normalize_email(email)

        try:
            response = self._gateway.supabase.auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except GatewayOfflineError:
            return self._offline_result()
        except Exception as exc:
            return self._failure(exc, SIGN_IN_FALLBACK, event="LOGIN_FAILED")

        state = self._to_session_state(response.session)
        if state is None:
            self._logger.warning("Sign-in for %s returned no session.", email)
            return AuthResult(
                success=False,
                error_code=AuthErrorCode.UNKNOWN_ERROR,
                error_message=SIGN_IN_FALLBACK,
            )

        self._session.set_session(state)
        log_audit_event(
            logger=self._logger,
            action="LOGIN",
            entity_type="Session",
            entity_id=state.user_id,
            user_id=state.user_id,
            details={"email": state.email or email},
        )
        return AuthResult(success=True, user_id=state.user_id, email=state.email or email)

    # ==================================================================
    # Sign up (identity registration)
    # ==================================================================

    def sign_up(self, email: str, password: str) -> AuthResult:
        """Register a new identity.

        The directory row for the identity is created server-side by the
        post-signup trigger.  ``user_id`` is ``None`` when the service
        accepted the request but returned no user.
        """
        try:
            response = self._gateway.supabase.auth.sign_up({
                "email": email,
                "password": password,
            })
        except GatewayOfflineError:
            return self._offline_result()
        except Exception as exc:
            return self._failure(exc, SIGN_UP_FALLBACK, event="SIGN_UP_FAILED")

        user = getattr(response, "user", None)
        user_id: Optional[str] = getattr(user, "id", None) if user is not None else None
        if user_id is None:
            self._logger.warning("Sign-up for %s returned no identity.", email)
            return AuthResult(success=True, email=email)

        self._logger.info(
            "Identity registered: %s", email,
            extra={"event": "SIGN_UP", "new_user_id": str(user_id)},
        )
        return AuthResult(success=True, user_id=str(user_id), email=email)

    # ==================================================================
    # Sign out
    # ==================================================================

    def logout(self) -> AuthResult:
        """End the server session and clear the local snapshot.

        Local state is cleared even when the server call fails, so the
        operator always ends up on the sign-in screen.
        """
        user_id = self._session.current_user_id
        email = self._session.current_email
        result = AuthResult(success=True)

        try:
            self._gateway.supabase.auth.sign_out()
        except GatewayOfflineError:
            self._logger.debug("Offline; skipping server-side sign_out.")
        except Exception as exc:
            result = self._failure(exc, SIGN_OUT_FALLBACK, event="LOGOUT_FAILED")

        self._session.clear()
        log_audit_event(
            logger=self._logger,
            action="LOGOUT",
            entity_type="Session",
            entity_id=user_id,
            user_id=user_id,
            details={"email": email, "server_ack": result.success},
        )
        return result

    # ==================================================================
    # Session observation
    # ==================================================================

    def current_session(self) -> Optional[SessionState]:
        """Ask the identity service for the current session.

        A missing session is not an error: offline mode and lookup
        failures both read as "no session".
        """
        try:
            raw = self._gateway.supabase.auth.get_session()
        except GatewayOfflineError:
            self._session.clear()
            return None
        except Exception as exc:
            self._logger.warning("Session lookup failed: %s", exc)
            self._session.clear()
            return None

        state = self._to_session_state(raw)
        if state is None:
            self._session.clear()
        else:
            self._session.set_session(state)
        return state

    def subscribe(self, listener: SessionListener) -> AuthSubscription:
        """Register *listener* for session-change notifications.

        The listener receives the event name (see ``AuthEvent``) and the
        new session, already converted to ``SessionState`` (or ``None``).
        It may be called from a non-UI thread.
        """
        def _on_change(event: object, session: object) -> None:
            state = self._to_session_state(session)
            event_name = str(getattr(event, "value", event))
            if event_name == AuthEvent.SIGNED_OUT or state is None:
                self._session.clear()
            else:
                self._session.set_session(state)
            listener(event_name, state)

        try:
            inner = self._gateway.supabase.auth.on_auth_state_change(_on_change)
        except GatewayOfflineError:
            return AuthSubscription(logger=self._logger)
        return AuthSubscription(inner=inner, logger=self._logger)

    # ==================================================================
    # Helpers
    # ==================================================================

    @staticmethod
    def _to_session_state(session: object) -> Optional[SessionState]:
        """Convert a Supabase ``Session`` into ``SessionState``."""
        if session is None:
            return None
        user = getattr(session, "user", None)
        user_id = getattr(user, "id", None)
        access_token = getattr(session, "access_token", None)
        if not user_id or not access_token:
            return None
        return SessionState(
            user_id=str(user_id),
            email=getattr(user, "email", None),
            access_token=access_token,
        )

    def _offline_result(self) -> AuthResult:
        return AuthResult(
            success=False,
            error_code=AuthErrorCode.OFFLINE,
            error_message=OFFLINE_MESSAGE,
        )

    def _failure(self, exc: Exception, fallback: str, *, event: str) -> AuthResult:
        """Build a failed ``AuthResult`` carrying the service's message."""
        message = service_message(exc, fallback)
        if isinstance(exc, (ConnectionError, TimeoutError)):
            code = AuthErrorCode.NETWORK_ERROR
        else:
            lowered = message.lower()
            code = next(
                (c for key, c in SUPABASE_ERROR_CODES.items() if key in lowered),
                AuthErrorCode.UNKNOWN_ERROR,
            )
        self._logger.warning(
            "Identity service error: %s", message,
            extra={"event": event, "error_code": str(code)},
        )
        return AuthResult(success=False, error_code=code, error_message=message)
