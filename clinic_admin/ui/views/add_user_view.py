"""Add User View: the account creation form.

Collects the identity credentials and the directory profile, validates
them through ``UserService.validate`` and runs ``UserService.create_user``
on a background thread.

**Thin UI Rule**: This module contains ZERO business logic.
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

import customtkinter as ctk

from clinic_admin.logger import StructuredLogger
from clinic_admin.models.enums import DEFAULT_ROLE, Route, UserRole
from clinic_admin.models.service_models import Notification, ServiceResult
from clinic_admin.models.user import FIELD_LABELS, NewUserInput
from clinic_admin.services.users import CREATE_FALLBACK, CREATE_SUCCESS, UserService
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
    FORM_WIDTH,
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

_SUBMIT_TEXT: str = "Create User"

# (field, placeholder, masked) in form order; role is the option menu.
_TEXT_FIELDS: tuple[tuple[str, str, bool], ...] = (
    ("email", "name@clinic.com", False),
    ("password", "At least 6 characters", True),
    ("first_name", "First name", False),
    ("last_name", "Last name", False),
    ("office_name", "Office name", False),
    ("phone_number", "Phone number", False),
    ("office_phone_number", "Office phone number", False),
)


class AddUserView(ctk.CTkFrame):
    """Creation form for a new directory user.

    Parameters
    ----------
    parent:
        Content container provided by the shell.
    user_service:
        Validates and creates the account.
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
        user_service: UserService,
        navigate: Callable[[str], None],
        notify: Callable[[Notification], None],
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent, fg_color=CONTENT_BG)
        self._user_service = user_service
        self._navigate = navigate
        self._notify = notify
        self._logger = logger
        self._is_loading: bool = False
        self._destroyed: bool = False

        self._entries: dict[str, ctk.CTkEntry] = {}
        self._role_var = ctk.StringVar(master=self, value=DEFAULT_ROLE.value)
        self._submit_button: Optional[ctk.CTkButton] = None
        self._error_label: Optional[ctk.CTkLabel] = None

        self._build_ui()

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        scroll = ctk.CTkScrollableFrame(self, fg_color="transparent")
        scroll.pack(fill="both", expand=True)

        top = ctk.CTkFrame(scroll, fg_color="transparent", width=FORM_WIDTH)
        top.pack(pady=(PADDING_LG, 0))
        ctk.CTkButton(
            top,
            text="Back to Dashboard",
            font=FONT_SMALL,
            fg_color="transparent",
            hover_color=OUTLINE_HOVER,
            text_color=TEXT_SECONDARY,
            height=28,
            corner_radius=CORNER_RADIUS,
            command=lambda: self._navigate(Route.DASHBOARD),
        ).pack(anchor="w")

        card = ctk.CTkFrame(
            scroll,
            width=FORM_WIDTH,
            fg_color=CONTENT_CARD_BG,
            corner_radius=CORNER_RADIUS,
            border_width=1,
            border_color=INPUT_BORDER,
        )
        card.pack(pady=PADDING_MD)

        inner = ctk.CTkFrame(card, fg_color="transparent")
        inner.pack(fill="both", expand=True, padx=PADDING_LG, pady=PADDING_LG)

        ctk.CTkLabel(
            inner,
            text="Add New User",
            font=FONT_HEADING,
            text_color=TEXT_PRIMARY,
            anchor="w",
        ).pack(fill="x", pady=(0, PADDING_MD))

        for field, placeholder, masked in _TEXT_FIELDS:
            self._entries[field] = self._add_entry(inner, field, placeholder, masked)
            if field == "last_name":
                self._add_role_menu(inner)

        self._submit_button = ctk.CTkButton(
            inner,
            text=_SUBMIT_TEXT,
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_LIGHT,
            width=FORM_WIDTH - 2 * PADDING_LG,
            height=BUTTON_HEIGHT,
            corner_radius=CORNER_RADIUS,
            command=self._handle_submit,
        )
        self._submit_button.pack(fill="x", pady=(PADDING_SM, 0))

        self._error_label = ctk.CTkLabel(
            inner,
            text="",
            font=FONT_SMALL,
            text_color=ERROR_TEXT,
            wraplength=FORM_WIDTH - 3 * PADDING_LG,
        )

    def _add_entry(
        self, parent: ctk.CTkFrame, field: str, placeholder: str, masked: bool,
    ) -> ctk.CTkEntry:
        ctk.CTkLabel(
            parent, text=FIELD_LABELS[field], font=FONT_LABEL, text_color=TEXT_PRIMARY, anchor="w",
        ).pack(fill="x", pady=(0, 4))
        entry = ctk.CTkEntry(
            parent,
            placeholder_text=placeholder,
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            text_color=TEXT_PRIMARY,
            show="*" if masked else "",
            height=INPUT_HEIGHT,
            corner_radius=CORNER_RADIUS,
        )
        entry.pack(fill="x", pady=(0, PADDING_SM))
        return entry

    def _add_role_menu(self, parent: ctk.CTkFrame) -> None:
        ctk.CTkLabel(
            parent, text=FIELD_LABELS["role"], font=FONT_LABEL, text_color=TEXT_PRIMARY, anchor="w",
        ).pack(fill="x", pady=(0, 4))
        ctk.CTkOptionMenu(
            parent,
            variable=self._role_var,
            values=[role.value for role in UserRole],
            font=FONT_BODY,
            fg_color=INPUT_BG,
            button_color=ACCENT_PRIMARY,
            button_hover_color=ACCENT_HOVER,
            text_color=TEXT_PRIMARY,
            height=INPUT_HEIGHT,
            corner_radius=CORNER_RADIUS,
        ).pack(fill="x", pady=(0, PADDING_SM))

    # ------------------------------------------------------------------
    # Event Handlers
    # ------------------------------------------------------------------

    def _collect_form(self) -> dict[str, str]:
        form = {field: entry.get() for field, entry in self._entries.items()}
        form["role"] = self._role_var.get()
        return form

    def _handle_submit(self) -> None:
        """Validate on the UI thread, then create the user in the background."""
        if self._is_loading:
            return
        checked = self._user_service.validate(self._collect_form())
        if not checked.success or checked.data is None:
            message = checked.error or CREATE_FALLBACK
            self._show_error(message)
            self._notify(Notification.error(message))
            return

        self._clear_error()
        self._set_loading(True)
        threading.Thread(
            target=self._create_worker,
            args=(checked.data,),
            name="create-user",
            daemon=True,
        ).start()

    def _create_worker(self, new_user: NewUserInput) -> None:
        """Background thread: delegate to ``UserService.create_user()``."""
        try:
            result = self._user_service.create_user(new_user)
        except Exception as exc:
            self._logger.error("User creation crashed: %s", exc, exc_info=True)
            result = ServiceResult(success=False, error=CREATE_FALLBACK, status_code=500)
        dispatch_to_ui(
            self, self._on_created, result,
            is_alive=lambda: not self._destroyed,
            logger=self._logger,
        )

    def _on_created(self, result: ServiceResult[str]) -> None:
        self._set_loading(False)
        if result.success:
            self._notify(Notification.success(CREATE_SUCCESS))
            self._navigate(Route.DASHBOARD)
            return
        message = result.error or CREATE_FALLBACK
        self._show_error(message)
        self._notify(Notification.error(message))

    # ------------------------------------------------------------------
    # UI Helper Methods
    # ------------------------------------------------------------------

    def _show_error(self, message: str) -> None:
        if self._error_label is not None:
            self._error_label.configure(text=message)
            self._error_label.pack(fill="x", pady=(PADDING_SM, 0))

    def _clear_error(self) -> None:
        if self._error_label is not None:
            self._error_label.configure(text="")
            self._error_label.pack_forget()

    def _set_loading(self, loading: bool) -> None:
        self._is_loading = loading
        if self._submit_button is None:
            return
        if loading:
            self._submit_button.configure(text="Creating User...", state="disabled")
        else:
            self._submit_button.configure(text=_SUBMIT_TEXT, state="normal")

    def destroy(self) -> None:
        self._destroyed = True
        super().destroy()
