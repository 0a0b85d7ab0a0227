"""
Directory Loader.

``DirectoryService`` fetches the user collection and wraps the outcome in
a ``ServiceResult``.  ``DirectoryListing`` is the per-mount state behind
the listing view: the loaded users, the loading flag, the search query
and the derived visible subset.

Architectural notes:
    - A listing loads exactly once.  Search input never reloads it.
    - Once a listing is disposed (its view was torn down) a late load
      result is dropped without touching state or notifying anyone.
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from clinic_admin.logger import StructuredLogger
from clinic_admin.models.service_models import Notification, ServiceResult
from clinic_admin.models.user import UserRecord
from clinic_admin.repositories.user_repository import UserRepository
from clinic_admin.services.base_service import BaseService
from clinic_admin.services.search import filter_users

LOAD_FALLBACK: str = "Failed to fetch users"


class DirectoryService(BaseService):
    """Read access to the directory for the listing view."""

    def __init__(self, repo: UserRepository, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._repo = repo

    def load_users(self) -> ServiceResult[list[UserRecord]]:
        """Fetch every user, most recently created first.

        The error message is the service's own wording, or
        ``LOAD_FALLBACK`` when it supplied none.
        """
        try:
            users = self._repo.list_recent()
        except Exception as exc:
            return self._failure(exc, LOAD_FALLBACK, "Fetch users")

        self._logger.info("Loaded %d users.", len(users))
        return ServiceResult(success=True, data=users)


class DirectoryListing:
    """State of one mounted listing view.

    Parameters
    ----------
    service:
        Performs the actual fetch.
    notify:
        Receives the destructive notification when loading fails.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        service: DirectoryService,
        notify: Callable[[Notification], None],
        logger: StructuredLogger,
    ) -> None:
        self._service = service
        self._notify = notify
        self._logger = logger
        self._lock = threading.Lock()

        self._users: list[UserRecord] = []
        self._query: str = ""
        self._is_loading: bool = False
        self._load_started: bool = False
        self._disposed: bool = False
        self._error: Optional[str] = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def begin_load(self) -> bool:
        """Mark the single load of this listing as started.

        Returns ``False`` (and changes nothing) when a load already ran or
        the listing is disposed.  Call on the UI thread, then run
        :meth:`fetch` wherever blocking I/O is acceptable and hand the
        result to :meth:`apply_result` back on the UI thread.
        """
        with self._lock:
            if self._load_started or self._disposed:
                return False
            self._load_started = True
            self._is_loading = True
            return True

    def fetch(self) -> ServiceResult[list[UserRecord]]:
        """Blocking fetch; touches no listing state."""
        return self._service.load_users()

    def apply_result(self, result: ServiceResult[list[UserRecord]]) -> bool:
        """Install a load result.  Returns ``False`` when it was discarded."""
        with self._lock:
            if self._disposed:
                self._logger.debug("Listing disposed; discarding load result.")
                return False
            self._is_loading = False
            if result.success:
                self._users = list(result.data or [])
                self._error = None
            else:
                self._users = []
                self._error = result.error or LOAD_FALLBACK
            error = self._error

        if error is not None:
            self._notify(Notification.error(error))
        return True

    def load(self) -> bool:
        """Run the whole load synchronously (begin, fetch, apply)."""
        if not self.begin_load():
            return False
        return self.apply_result(self.fetch())

    def dispose(self) -> None:
        """Detach from the view; any in-flight result will be ignored."""
        with self._lock:
            self._disposed = True
            self._is_loading = False

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def set_query(self, query: str) -> list[UserRecord]:
        """Update the search text and return the new visible subset."""
        with self._lock:
            self._query = query
        return self.visible_users

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def users(self) -> list[UserRecord]:
        with self._lock:
            return list(self._users)

    @property
    def visible_users(self) -> list[UserRecord]:
        """Loaded users matching the current query, original order kept."""
        with self._lock:
            users, query = list(self._users), self._query
        return filter_users(users, query)

    @property
    def query(self) -> str:
        with self._lock:
            return self._query

    @property
    def is_loading(self) -> bool:
        with self._lock:
            return self._is_loading

    @property
    def error(self) -> Optional[str]:
        with self._lock:
            return self._error

    @property
    def disposed(self) -> bool:
        with self._lock:
            return self._disposed
