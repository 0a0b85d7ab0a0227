"""
Session Guard.

Gates the protected listing view.  On mount it asks the identity service
for the current session; while mounted it listens for session changes.
Either a missing session or a sign-out event triggers a single redirect
to the sign-in screen.  The listener is released on teardown.

Usage (scoped to a view's lifetime)::

    guard = SessionGuard(auth_service, on_redirect=go_to_login, logger=log)
    if guard.activate():
        start_loading()
    ...
    guard.release()   # in the view's destroy()

or as a context manager::

    with SessionGuard(auth_service, on_redirect=go_to_login, logger=log) as guard:
        ...
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from clinic_admin.logger import StructuredLogger
from clinic_admin.models.auth_models import SessionState
from clinic_admin.models.enums import AuthEvent
from clinic_admin.services.auth_service import AuthService, AuthSubscription


class SessionGuard:
    """Scoped session check plus session-change subscription.

    Parameters
    ----------
    auth_service:
        Source of the current session and of change notifications.
    on_redirect:
        Called at most once, when the operator must be sent to sign-in.
        May be invoked from the identity client's thread; views wrap it
        with ``widget.after(0, ...)``.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        auth_service: AuthService,
        on_redirect: Callable[[], None],
        logger: StructuredLogger,
    ) -> None:
        self._auth_service = auth_service
        self._on_redirect = on_redirect
        self._logger = logger
        self._lock = threading.Lock()
        self._subscription: Optional[AuthSubscription] = None
        self._redirected: bool = False
        self._released: bool = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def activate(self) -> bool:
        """Check the session and start listening.

        Returns ``True`` when a session exists and the view may proceed
        (load its data).  Returns ``False`` after redirecting.
        """
        session = self._auth_service.current_session()
        if session is None:
            self._logger.info("No active session; redirecting to sign-in.")
            self._redirect()
            return False

        subscription = self._auth_service.subscribe(self._handle_change)
        with self._lock:
            if self._released or self._redirected:
                # Torn down (or signed out) while subscribing.
                subscription.unsubscribe()
                return False
            self._subscription = subscription
        return True

    def release(self) -> None:
        """Stop listening.  Idempotent; call from every teardown path."""
        with self._lock:
            self._released = True
            subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.unsubscribe()

    @property
    def is_listening(self) -> bool:
        with self._lock:
            return self._subscription is not None and self._subscription.active

    @property
    def redirected(self) -> bool:
        with self._lock:
            return self._redirected

    def __enter__(self) -> "SessionGuard":
        self.activate()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _handle_change(self, event: str, session: Optional[SessionState]) -> None:
        if event == AuthEvent.SIGNED_OUT or session is None:
            self._logger.info(
                "Session ended (%s); redirecting to sign-in.", event,
            )
            self._redirect()

    def _redirect(self) -> None:
        with self._lock:
            if self._redirected or self._released:
                return
            self._redirected = True
            subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.unsubscribe()
        self._on_redirect()
