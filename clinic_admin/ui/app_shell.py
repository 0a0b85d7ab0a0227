"""Application Host Shell.

The top-level ``CTk`` window.  It owns the content container, the toast
surface and the ``Router``, and registers one factory per destination:

    /                 IndexView
    /login            LoginView
    /dashboard        DashboardView (guarded)
    /dashboard/add    AddUserView

All dependencies are injected via the constructor.  The shell contains
no business logic; every view delegates to the services it is handed.
"""

from __future__ import annotations

from typing import Optional

import customtkinter as ctk

from clinic_admin import __version__ as _APP_VERSION
from clinic_admin.config import AppConfig
from clinic_admin.logger import StructuredLogger
from clinic_admin.models.enums import Route
from clinic_admin.models.service_models import Notification
from clinic_admin.services import ServiceContainer
from clinic_admin.ui.components.toast import ToastSurface
from clinic_admin.ui.login_view import LoginView
from clinic_admin.ui.router import RouteEntry, Router
from clinic_admin.ui.theme import (
    CONTENT_BG,
    MAIN_WINDOW_HEIGHT,
    MAIN_WINDOW_WIDTH,
    MIN_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH,
)
from clinic_admin.ui.views.add_user_view import AddUserView
from clinic_admin.ui.views.dashboard_view import DashboardView
from clinic_admin.ui.views.index_view import IndexView


class AppShell(ctk.CTk):
    """Host Shell: the main application window.

    Parameters
    ----------
    config:
        Application configuration (window title).
    services:
        Fully-wired service container.
    logger:
        Structured logger instance.
    start_path:
        First destination mounted; ``/`` by default.
    """

    def __init__(
        self,
        config: AppConfig,
        services: ServiceContainer,
        logger: StructuredLogger,
        start_path: str = Route.INDEX,
    ) -> None:
        super().__init__()

        self._config = config
        self._services = services
        self._logger = logger
        self._closing: bool = False

        # Window defaults
        self.title(config.WINDOW_TITLE)
        self.geometry(f"{MAIN_WINDOW_WIDTH}x{MAIN_WINDOW_HEIGHT}")
        self.minsize(MIN_WINDOW_WIDTH, MIN_WINDOW_HEIGHT)
        ctk.set_appearance_mode("light")
        ctk.set_default_color_theme("blue")

        self._content_container = ctk.CTkFrame(self, fg_color=CONTENT_BG, corner_radius=0)
        self._content_container.pack(fill="both", expand=True)

        self._toast = ToastSurface(self, logger=logger)

        self._router = Router(
            self._content_container,
            logger=logger,
            on_navigate=self._on_navigate,
        )
        self._register_routes()

        # Graceful shutdown on window close
        self.protocol("WM_DELETE_WINDOW", self._on_close)

        self._logger.info("Clinic Directory Admin v%s started.", _APP_VERSION)
        self.navigate(start_path)

    # ==================================================================
    # Routing
    # ==================================================================

    def _register_routes(self) -> None:
        services = self._services
        self._router.register(
            Route.INDEX,
            "Welcome",
            lambda parent: IndexView(parent, navigate=self.navigate),
        )
        self._router.register(
            Route.LOGIN,
            "Sign In",
            lambda parent: LoginView(
                parent,
                auth_service=services["auth_service"],
                navigate=self.navigate,
                notify=self.notify,
                logger=self._logger,
            ),
        )
        self._router.register(
            Route.DASHBOARD,
            "Users",
            lambda parent: DashboardView(
                parent,
                auth_service=services["auth_service"],
                directory_service=services["directory_service"],
                navigate=self.navigate,
                notify=self.notify,
                logger=self._logger,
            ),
        )
        self._router.register(
            Route.ADD_USER,
            "Add User",
            lambda parent: AddUserView(
                parent,
                user_service=services["user_service"],
                navigate=self.navigate,
                notify=self.notify,
                logger=self._logger,
            ),
        )

    def navigate(self, path: str) -> None:
        """Mount the view registered at *path* (UI thread only)."""
        if self._closing:
            return
        self._router.navigate(path)

    def notify(self, notification: Notification) -> None:
        """Show *notification* on the toast surface (UI thread only)."""
        if self._closing:
            return
        self._toast.show(notification)

    @property
    def current_path(self) -> Optional[str]:
        return self._router.current_path

    def _on_navigate(self, entry: RouteEntry) -> None:
        self.title(f"{entry.title} - {self._config.WINDOW_TITLE}")
        # Keep the toast above the freshly packed view.
        self._toast.lift()

    # ==================================================================
    # Shutdown
    # ==================================================================

    def _on_close(self) -> None:
        """Tear down the mounted view (releasing its listeners) before destroying."""
        self._closing = True
        self._router.close()
        self.destroy()
