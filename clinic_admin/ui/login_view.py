"""Login View: Sign-In Screen.

Email + password form.  Authenticates against the identity service via
``AuthService`` on a background thread and, on success, hands control to
the router.

**Thin UI Rule**: This module contains ZERO business logic.  It gathers
inputs, delegates to ``AuthService``, and displays results.
"""

from __future__ import annotations

import threading
import tkinter as tk
from typing import Any, Callable, Optional

import customtkinter as ctk

from clinic_admin.logger import StructuredLogger
from clinic_admin.models.enums import Route
from clinic_admin.models.service_models import Notification
from clinic_admin.services.auth_service import SIGN_IN_FALLBACK, AuthService
from clinic_admin.ui.dispatch import dispatch_to_ui
from clinic_admin.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    BUTTON_HEIGHT,
    CONTENT_BG,
    CONTENT_CARD_BG,
    CORNER_RADIUS,
    ERROR_TEXT,
    FONT_BODY,
    FONT_BUTTON,
    FONT_HEADING,
    FONT_LABEL,
    FONT_SMALL,
    INPUT_BG,
    INPUT_BORDER,
    INPUT_HEIGHT,
    OUTLINE_HOVER,
    PADDING_LG,
    PADDING_MD,
    PADDING_SM,
    TEXT_LIGHT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)

_CARD_WIDTH: int = 420
_SIGN_IN_TEXT: str = "Sign In"


class LoginView(ctk.CTkFrame):
    """Centered sign-in card.

    Parameters
    ----------
    parent:
        Content container provided by the shell.
    auth_service:
        Performs the sign-in.
    navigate:
        Router callback; called with ``/dashboard`` after success.
    notify:
        Toast callback for failures.
    logger:
        Structured JSON logger.
    """

    def __init__(
        self,
        parent: ctk.CTkFrame,
        auth_service: AuthService,
        navigate: Callable[[str], None],
        notify: Callable[[Notification], None],
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent, fg_color=CONTENT_BG)

        self._auth_service: AuthService = auth_service
        self._navigate: Callable[[str], None] = navigate
        self._notify: Callable[[Notification], None] = notify
        self._logger: StructuredLogger = logger
        self._is_loading: bool = False
        self._destroyed: bool = False

        self._email_entry: Optional[ctk.CTkEntry] = None
        self._password_entry: Optional[ctk.CTkEntry] = None
        self._login_button: Optional[ctk.CTkButton] = None
        self._error_label: Optional[ctk.CTkLabel] = None

        self._build_ui()

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)
        self.grid_columnconfigure(0, weight=1)

        card = ctk.CTkFrame(
            self,
            width=_CARD_WIDTH,
            fg_color=CONTENT_CARD_BG,
            corner_radius=16,
            border_width=1,
            border_color=INPUT_BORDER,
        )
        card.grid(row=1, column=0)

        inner = ctk.CTkFrame(card, fg_color="transparent")
        inner.pack(fill="both", expand=True, padx=36, pady=28)

        ctk.CTkLabel(
            inner,
            text="Sign in",
            font=FONT_HEADING,
            text_color=TEXT_PRIMARY,
        ).pack(pady=(0, 2))

        ctk.CTkLabel(
            inner,
            text="Enter your credentials to access the directory",
            font=FONT_SMALL,
            text_color=TEXT_SECONDARY,
        ).pack(pady=(0, PADDING_LG))

        # Email
        ctk.CTkLabel(
            inner, text="Email", font=FONT_LABEL, text_color=TEXT_PRIMARY, anchor="w",
        ).pack(fill="x", pady=(0, 4))
        self._email_entry = ctk.CTkEntry(
            inner,
            placeholder_text="Enter your email",
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            text_color=TEXT_PRIMARY,
            width=_CARD_WIDTH - 72,
            height=INPUT_HEIGHT,
            corner_radius=CORNER_RADIUS,
        )
        self._email_entry.pack(fill="x", pady=(0, PADDING_MD))

        # Password
        ctk.CTkLabel(
            inner, text="Password", font=FONT_LABEL, text_color=TEXT_PRIMARY, anchor="w",
        ).pack(fill="x", pady=(0, 4))
        self._password_entry = ctk.CTkEntry(
            inner,
            placeholder_text="Enter your password",
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            text_color=TEXT_PRIMARY,
            show="*",
            height=INPUT_HEIGHT,
            corner_radius=CORNER_RADIUS,
        )
        self._password_entry.pack(fill="x", pady=(0, PADDING_LG))

        self._login_button = ctk.CTkButton(
            inner,
            text=_SIGN_IN_TEXT,
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_LIGHT,
            height=BUTTON_HEIGHT,
            corner_radius=CORNER_RADIUS,
            command=self._handle_login,
        )
        self._login_button.pack(fill="x", pady=(0, PADDING_SM))

        # Error label (hidden by default)
        self._error_label = ctk.CTkLabel(
            inner,
            text="",
            font=FONT_SMALL,
            text_color=ERROR_TEXT,
            wraplength=_CARD_WIDTH - 100,
        )

        ctk.CTkButton(
            inner,
            text="Back",
            font=FONT_SMALL,
            fg_color="transparent",
            hover_color=OUTLINE_HOVER,
            text_color=TEXT_SECONDARY,
            height=28,
            corner_radius=CORNER_RADIUS,
            command=lambda: self._navigate(Route.INDEX),
        ).pack(pady=(PADDING_SM, 0))

        self._email_entry.bind("<Return>", self._on_enter_key)
        self._password_entry.bind("<Return>", self._on_enter_key)

    # ------------------------------------------------------------------
    # Event Handlers
    # ------------------------------------------------------------------

    def _on_enter_key(self, event: "tk.Event[tk.Misc]") -> None:
        self._handle_login()

    def _handle_login(self) -> None:
        """Gather inputs and start background authentication."""
        if self._is_loading:
            return
        email = self._email_entry.get().strip()
        password = self._password_entry.get()

        if not email or not password:
            self._show_error("Please enter email and password.")
            return

        self._set_loading(True)
        self._clear_error()

        threading.Thread(
            target=self._authenticate,
            args=(email, password),
            name="sign-in",
            daemon=True,
        ).start()

    def _authenticate(self, email: str, password: str) -> None:
        """Background thread: delegate to ``AuthService.login()``.

        All UI mutations are dispatched back through :meth:`_dispatch`.
        """
        try:
            result = self._auth_service.login(email, password)
        except Exception as exc:
            self._logger.error("Sign-in crashed: %s", exc, exc_info=True)
            self._dispatch(self._show_login_failure, SIGN_IN_FALLBACK)
            return

        if result.success:
            self._dispatch(self._navigate, Route.DASHBOARD)
        else:
            self._dispatch(self._show_login_failure, result.error_message or SIGN_IN_FALLBACK)

    def _dispatch(self, callback: Callable[..., None], *args: Any) -> None:
        dispatch_to_ui(
            self, callback, *args,
            is_alive=lambda: not self._destroyed,
            logger=self._logger,
        )

    def _show_login_failure(self, message: str) -> None:
        self._set_loading(False)
        self._show_error(message)
        self._notify(Notification.error(message))

    # ------------------------------------------------------------------
    # UI Helper Methods
    # ------------------------------------------------------------------

    def _show_error(self, message: str) -> None:
        if self._error_label is not None:
            self._error_label.configure(text=message)
            self._error_label.pack(fill="x", after=self._login_button)

    def _clear_error(self) -> None:
        if self._error_label is not None:
            self._error_label.configure(text="")
            self._error_label.pack_forget()

    def _set_loading(self, loading: bool) -> None:
        """Disable the button while a request is in flight."""
        self._is_loading = loading
        if self._login_button is None:
            return
        if loading:
            self._login_button.configure(text="Signing in...", state="disabled")
        else:
            self._login_button.configure(text=_SIGN_IN_TEXT, state="normal")

    def destroy(self) -> None:
        self._destroyed = True
        super().destroy()
