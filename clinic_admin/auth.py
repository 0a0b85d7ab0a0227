"""
Local Session State.

Provides an injectable ``SessionManager`` holding the last session the
identity service reported for the signed-in operator.  The identity
service stays the source of truth; this is only what the UI reads
when it needs the operator's id or email (audit lines, the header label).

Usage::

    from clinic_admin.auth import SessionManager
    from clinic_admin.models.auth_models import SessionState

    session = SessionManager()
    session.set_session(SessionState(user_id="abc-123", access_token="..."))
    session.current_user_id  # "abc-123"
"""

from __future__ import annotations

import threading
from typing import Optional

from clinic_admin.models.auth_models import SessionState


class SessionManager:
    """Injectable holder for the operator's session snapshot.

    Worker threads write it (after sign-in) and the UI thread reads it,
    so every access goes through a re-entrant lock.
    """

    def __init__(self) -> None:
        self._lock: threading.RLock = threading.RLock()
        self._session: Optional[SessionState] = None

    def set_session(self, session: SessionState) -> None:
        """Record *session* as the operator's current session."""
        with self._lock:
            self._session = session

    def get_session(self) -> Optional[SessionState]:
        """Return the current snapshot, or ``None`` when signed out."""
        with self._lock:
            return self._session

    def clear(self) -> None:
        """Forget the session (sign-out, or the service reported none)."""
        with self._lock:
            self._session = None

    @property
    def is_authenticated(self) -> bool:
        """``True`` when a session snapshot is held."""
        with self._lock:
            return self._session is not None

    @property
    def current_user_id(self) -> str:
        """Identity id of the operator, or ``"unknown"`` when signed out."""
        with self._lock:
            return self._session.user_id if self._session else "unknown"

    @property
    def current_email(self) -> str:
        """Email of the operator, or an empty string when unknown."""
        with self._lock:
            if self._session is None or not self._session.email:
                return ""
            return self._session.email
