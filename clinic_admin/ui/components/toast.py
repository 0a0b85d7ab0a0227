"""Toast Notification Surface.

Floating message in the bottom-right corner of the window.  Accepts a
``Notification`` (title, description, variant) and hides itself after
``TOAST_DURATION_MS``.  A new toast replaces the one on screen.

**Thin UI Rule**: no business logic; it only renders what it is given.
"""

from __future__ import annotations

from typing import Optional

import customtkinter as ctk

from clinic_admin.logger import StructuredLogger
from clinic_admin.models.enums import NotificationVariant
from clinic_admin.models.service_models import Notification
from clinic_admin.ui.theme import (
    CORNER_RADIUS,
    FONT_BODY,
    FONT_LABEL,
    PADDING_MD,
    PADDING_SM,
    TEXT_LIGHT,
    TOAST_DEFAULT_BG,
    TOAST_DESTRUCTIVE_BG,
    TOAST_DURATION_MS,
)

_WRAP_LENGTH: int = 320


class ToastSurface(ctk.CTkFrame):
    """Notification surface placed over the main window.

    Parameters
    ----------
    parent:
        The root window.  The toast is positioned with ``place()`` so it
        floats above whatever view is mounted.
    logger:
        Structured logger; every toast is also logged.
    """

    def __init__(self, parent: ctk.CTk, logger: StructuredLogger) -> None:
        super().__init__(parent, fg_color=TOAST_DEFAULT_BG, corner_radius=CORNER_RADIUS)
        self._logger = logger
        self._hide_job: Optional[str] = None

        self._title_label = ctk.CTkLabel(
            self,
            text="",
            font=FONT_LABEL,
            text_color=TEXT_LIGHT,
            anchor="w",
            justify="left",
        )
        self._title_label.pack(fill="x", padx=PADDING_MD, pady=(PADDING_SM, 0))

        self._description_label = ctk.CTkLabel(
            self,
            text="",
            font=FONT_BODY,
            text_color=TEXT_LIGHT,
            anchor="w",
            justify="left",
            wraplength=_WRAP_LENGTH,
        )
        self._description_label.pack(fill="x", padx=PADDING_MD, pady=(0, PADDING_SM))

    def show(self, notification: Notification) -> None:
        """Display *notification*, replacing any toast on screen."""
        level = (
            self._logger.warning
            if notification.variant == NotificationVariant.DESTRUCTIVE
            else self._logger.info
        )
        level(
            "Toast: %s - %s", notification.title, notification.description,
            extra={"variant": str(notification.variant)},
        )

        colour = (
            TOAST_DESTRUCTIVE_BG
            if notification.variant == NotificationVariant.DESTRUCTIVE
            else TOAST_DEFAULT_BG
        )
        self.configure(fg_color=colour)
        self._title_label.configure(text=notification.title)
        self._description_label.configure(text=notification.description)

        self.place(relx=1.0, rely=1.0, x=-PADDING_MD, y=-PADDING_MD, anchor="se")
        self.lift()

        if self._hide_job is not None:
            self.after_cancel(self._hide_job)
        self._hide_job = self.after(TOAST_DURATION_MS, self.hide)

    def hide(self) -> None:
        self._hide_job = None
        self.place_forget()

    def destroy(self) -> None:
        if self._hide_job is not None:
            self.after_cancel(self._hide_job)
            self._hide_job = None
        super().destroy()
