"""Dashboard View: the guarded user directory.

On mount a background worker checks the session through ``SessionGuard``
and, only when one exists, loads the directory once through
``DirectoryListing``.  Typing in the search box filters the loaded users
in memory; it never reloads them.

**Thin UI Rule**: Zero business logic.  Session rules live in
``SessionGuard``, loading and filtering in ``DirectoryListing``.
"""

from __future__ import annotations

import threading
import tkinter as tk
from typing import Any, Callable, Optional

import customtkinter as ctk

from clinic_admin.logger import StructuredLogger
from clinic_admin.models.enums import Route
from clinic_admin.models.service_models import Notification, ServiceResult
from clinic_admin.models.user import UserRecord
from clinic_admin.services.auth_service import SIGN_OUT_FALLBACK, AuthService
from clinic_admin.services.directory import DirectoryListing, DirectoryService
from clinic_admin.services.session_guard import SessionGuard
from clinic_admin.ui.dispatch import dispatch_to_ui
from clinic_admin.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    BUTTON_HEIGHT,
    CONTENT_BG,
    CONTENT_CARD_BG,
    CORNER_RADIUS,
    FONT_BODY,
    FONT_BUTTON,
    FONT_HEADING,
    FONT_LABEL,
    INPUT_BG,
    INPUT_BORDER,
    INPUT_HEIGHT,
    NAV_BG,
    NAV_HEIGHT,
    NAV_TEXT,
    OUTLINE_HOVER,
    PADDING_LG,
    PADDING_MD,
    PADDING_SM,
    ROW_ALT_BG,
    TABLE_HEADER_BG,
    TEXT_LIGHT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)

# (header, relative column weight)
_COLUMNS: tuple[tuple[str, int], ...] = (
    ("Name", 3),
    ("Email", 4),
    ("Role", 2),
    ("Office", 3),
    ("Created", 2),
)
_DATE_FORMAT: str = "%Y-%m-%d"
_EMPTY_TEXT: str = "No users found."
_LOADING_TEXT: str = "Loading users..."


def _row_values(user: UserRecord) -> tuple[str, ...]:
    """Display strings for one table row, in ``_COLUMNS`` order."""
    return (
        user.full_name or "-",
        user.email,
        str(user.role) if user.role is not None else "-",
        user.office_name or "-",
        user.created_at.strftime(_DATE_FORMAT),
    )


class DashboardView(ctk.CTkFrame):
    """Searchable user table behind the session guard.

    Parameters
    ----------
    parent:
        Content container provided by the shell.
    auth_service:
        Session checks, change notifications and sign-out.
    directory_service:
        Backs this mount's ``DirectoryListing``.
    navigate:
        Router callback.
    notify:
        Toast callback.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        parent: ctk.CTkFrame,
        auth_service: AuthService,
        directory_service: DirectoryService,
        navigate: Callable[[str], None],
        notify: Callable[[Notification], None],
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent, fg_color=CONTENT_BG)
        self._auth_service = auth_service
        self._navigate = navigate
        self._notify = notify
        self._logger = logger
        self._destroyed: bool = False
        self._signing_out: bool = False

        self._listing = DirectoryListing(
            directory_service,
            notify=lambda n: self._dispatch(self._notify, n),
            logger=logger,
        )
        self._guard = SessionGuard(
            auth_service,
            on_redirect=lambda: self._dispatch(self._navigate, Route.LOGIN),
            logger=logger,
        )

        self._search_var = tk.StringVar(master=self, value="")
        self._search_trace: Optional[str] = None
        self._sign_out_button: Optional[ctk.CTkButton] = None
        self._status_label: Optional[ctk.CTkLabel] = None
        self._rows_frame: Optional[ctk.CTkScrollableFrame] = None
        self._row_widgets: list[ctk.CTkFrame] = []

        self._build_ui()
        self._start_load()

    # ------------------------------------------------------------------
    # Widget creation
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self._build_nav_bar()

        card = ctk.CTkFrame(self, fg_color=CONTENT_CARD_BG, corner_radius=CORNER_RADIUS)
        card.pack(fill="both", expand=True, padx=PADDING_LG, pady=PADDING_LG)

        ctk.CTkLabel(
            card,
            text="Users",
            font=FONT_HEADING,
            text_color=TEXT_PRIMARY,
            anchor="w",
        ).pack(fill="x", padx=PADDING_MD, pady=(PADDING_MD, PADDING_SM))

        search_entry = ctk.CTkEntry(
            card,
            textvariable=self._search_var,
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            text_color=TEXT_PRIMARY,
            height=INPUT_HEIGHT,
            corner_radius=CORNER_RADIUS,
        )
        search_entry.pack(fill="x", padx=PADDING_MD, pady=(0, PADDING_MD))
        self._search_trace = self._search_var.trace_add("write", self._on_search_changed)

        header = ctk.CTkFrame(card, fg_color=TABLE_HEADER_BG, corner_radius=0)
        header.pack(fill="x", padx=PADDING_MD)
        self._configure_columns(header)
        for col, (title, _weight) in enumerate(_COLUMNS):
            ctk.CTkLabel(
                header,
                text=title,
                font=FONT_LABEL,
                text_color=TEXT_PRIMARY,
                anchor="w",
            ).grid(row=0, column=col, sticky="ew", padx=PADDING_SM, pady=6)

        self._rows_frame = ctk.CTkScrollableFrame(card, fg_color="transparent")
        self._rows_frame.pack(fill="both", expand=True, padx=PADDING_MD, pady=(0, PADDING_MD))

        self._status_label = ctk.CTkLabel(
            self._rows_frame,
            text=_LOADING_TEXT,
            font=FONT_BODY,
            text_color=TEXT_SECONDARY,
        )
        self._status_label.pack(pady=PADDING_LG)

    def _build_nav_bar(self) -> None:
        nav = ctk.CTkFrame(self, fg_color=NAV_BG, height=NAV_HEIGHT, corner_radius=0)
        nav.pack(fill="x")
        nav.pack_propagate(False)

        ctk.CTkLabel(
            nav,
            text="Clinic Directory",
            font=FONT_BUTTON,
            text_color=NAV_TEXT,
        ).pack(side="left", padx=PADDING_LG)

        self._sign_out_button = ctk.CTkButton(
            nav,
            text="Sign Out",
            font=FONT_BUTTON,
            fg_color="transparent",
            hover_color=OUTLINE_HOVER,
            border_width=1,
            border_color=NAV_TEXT,
            text_color=NAV_TEXT,
            width=100,
            height=BUTTON_HEIGHT - 8,
            corner_radius=CORNER_RADIUS,
            command=self._handle_sign_out,
        )
        self._sign_out_button.pack(side="right", padx=(PADDING_SM, PADDING_LG))

        ctk.CTkButton(
            nav,
            text="Add User",
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_LIGHT,
            width=100,
            height=BUTTON_HEIGHT - 8,
            corner_radius=CORNER_RADIUS,
            command=lambda: self._navigate(Route.ADD_USER),
        ).pack(side="right")

    @staticmethod
    def _configure_columns(frame: ctk.CTkFrame) -> None:
        for col, (_title, weight) in enumerate(_COLUMNS):
            frame.grid_columnconfigure(col, weight=weight, uniform="users")

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _start_load(self) -> None:
        if not self._listing.begin_load():
            return
        threading.Thread(target=self._load_worker, name="directory-load", daemon=True).start()

    def _load_worker(self) -> None:
        """Background thread: session check first, then the single fetch."""
        try:
            if not self._guard.activate():
                return
            result = self._listing.fetch()
        except Exception as exc:
            self._logger.error("Directory load crashed: %s", exc, exc_info=True)
            result = ServiceResult(success=False, error=None, status_code=500)
        self._dispatch(self._apply_result, result)

    def _apply_result(self, result: ServiceResult[list[UserRecord]]) -> None:
        if self._listing.apply_result(result):
            self._render_rows(self._listing.visible_users)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _on_search_changed(self, *_args: Any) -> None:
        visible = self._listing.set_query(self._search_var.get())
        if not self._listing.is_loading:
            self._render_rows(visible)

    # ------------------------------------------------------------------
    # Table rendering
    # ------------------------------------------------------------------

    def _render_rows(self, users: list[UserRecord]) -> None:
        if self._rows_frame is None or self._status_label is None:
            return
        for row in self._row_widgets:
            row.destroy()
        self._row_widgets = []

        if not users:
            self._status_label.configure(text=_EMPTY_TEXT)
            self._status_label.pack(pady=PADDING_LG)
            return
        self._status_label.pack_forget()

        for index, user in enumerate(users):
            row = ctk.CTkFrame(
                self._rows_frame,
                fg_color=ROW_ALT_BG if index % 2 else CONTENT_CARD_BG,
                corner_radius=0,
            )
            row.pack(fill="x")
            self._configure_columns(row)
            for col, value in enumerate(_row_values(user)):
                ctk.CTkLabel(
                    row,
                    text=value,
                    font=FONT_BODY,
                    text_color=TEXT_PRIMARY,
                    anchor="w",
                ).grid(row=0, column=col, sticky="ew", padx=PADDING_SM, pady=4)
            self._row_widgets.append(row)

    # ------------------------------------------------------------------
    # Sign out
    # ------------------------------------------------------------------

    def _handle_sign_out(self) -> None:
        if self._signing_out:
            return
        self._signing_out = True
        # This view navigates itself; the guard must not redirect as well.
        self._guard.release()
        if self._sign_out_button is not None:
            self._sign_out_button.configure(text="Signing out...", state="disabled")
        threading.Thread(target=self._sign_out_worker, name="sign-out", daemon=True).start()

    def _sign_out_worker(self) -> None:
        try:
            result = self._auth_service.logout()
            message = None if result.success else (result.error_message or SIGN_OUT_FALLBACK)
        except Exception as exc:
            self._logger.error("Sign-out crashed: %s", exc, exc_info=True)
            message = SIGN_OUT_FALLBACK
        self._dispatch(self._finish_sign_out, message)

    def _finish_sign_out(self, error: Optional[str]) -> None:
        if error is not None:
            self._notify(Notification.error(error))
        self._navigate(Route.LOGIN)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _dispatch(self, callback: Callable[..., None], *args: Any) -> None:
        """Run *callback* on the UI thread unless this view is gone."""
        dispatch_to_ui(
            self, callback, *args,
            is_alive=lambda: not self._destroyed,
            logger=self._logger,
        )

    def destroy(self) -> None:
        """Release the session listener and drop any in-flight load."""
        self._destroyed = True
        self._guard.release()
        self._listing.dispose()
        if self._search_trace is not None:
            self._search_var.trace_remove("write", self._search_trace)
            self._search_trace = None
        super().destroy()
