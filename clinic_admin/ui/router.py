"""View Router.

Maps named destinations (``/``, ``/login``, ``/dashboard``,
``/dashboard/add``) to view factories and keeps exactly one view mounted.

Navigating tears the current view down (``destroy()``, where views
release their session listeners) before the next one is built.  A
navigation requested while a view is still being built is deferred
until that build finishes, so a redirect issued during construction
always wins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

from clinic_admin.logger import StructuredLogger
from clinic_admin.models.enums import Route

if TYPE_CHECKING:
    import customtkinter as ctk

ViewFactory = Callable[[Any], Any]


class RouteEntry:
    """Metadata for a single registered destination.

    Attributes
    ----------
    path:
        Destination path (e.g. ``'/dashboard'``).
    title:
        Window title shown while the view is mounted.
    factory:
        Callable receiving the content container and returning the
        view's root frame.  Called on every navigation to the path.
    """

    __slots__ = ("path", "title", "factory")

    def __init__(self, path: str, title: str, factory: ViewFactory) -> None:
        self.path = path
        self.title = title
        self.factory = factory


class Router:
    """Single-view navigation over a content container.

    Parameters
    ----------
    container:
        Parent widget every view is packed into.
    logger:
        Structured logger for navigation events.
    on_navigate:
        Optional callback receiving each mounted ``RouteEntry`` (the
        shell uses it to update the window title).
    """

    def __init__(
        self,
        container: "ctk.CTkFrame",
        logger: StructuredLogger,
        on_navigate: Optional[Callable[[RouteEntry], None]] = None,
    ) -> None:
        self._container = container
        self._logger = logger
        self._on_navigate = on_navigate
        self._entries: dict[str, RouteEntry] = {}
        self._current_view: Optional[Any] = None
        self._current_path: Optional[str] = None
        self._building: bool = False
        self._pending_path: Optional[str] = None

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, path: str, title: str, factory: ViewFactory) -> None:
        """Register *factory* for *path*, replacing any earlier entry."""
        path = str(path)
        if path in self._entries:
            self._logger.warning("Route '%s' already registered; overwriting.", path)
        self._entries[path] = RouteEntry(path=path, title=title, factory=factory)

    def has_route(self, path: str) -> bool:
        return str(path) in self._entries

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def navigate(self, path: str) -> None:
        """Tear down the current view and mount the one registered at *path*.

        Unknown paths fall back to ``/``.
        """
        path = str(path)
        if self._building:
            self._pending_path = path
            return

        entry = self._entries.get(path)
        if entry is None:
            self._logger.error("Cannot navigate to unregistered route: %s", path)
            entry = self._entries.get(str(Route.INDEX))
            if entry is None:
                return

        self._teardown_current()

        self._building = True
        try:
            view = entry.factory(self._container)
        finally:
            self._building = False

        self._current_view = view
        self._current_path = entry.path
        view.pack(fill="both", expand=True)
        self._logger.info("Navigated to %s", entry.path)

        if self._on_navigate is not None:
            self._on_navigate(entry)

        if self._pending_path is not None:
            pending, self._pending_path = self._pending_path, None
            self.navigate(pending)

    def close(self) -> None:
        """Tear down the mounted view without mounting another."""
        self._teardown_current()

    @property
    def current_path(self) -> Optional[str]:
        return self._current_path

    @property
    def current_view(self) -> Optional[Any]:
        return self._current_view

    def _teardown_current(self) -> None:
        view, self._current_view = self._current_view, None
        self._current_path = None
        if view is None:
            return
        try:
            view.destroy()
        except Exception as exc:
            self._logger.warning("View teardown failed: %s", exc)
