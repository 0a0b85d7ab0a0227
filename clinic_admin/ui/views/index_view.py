"""Index View: the landing screen with a single "Sign In" entry point."""

from __future__ import annotations

from typing import Callable

import customtkinter as ctk

from clinic_admin.models.enums import Route
from clinic_admin.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    BUTTON_HEIGHT,
    CONTENT_BG,
    CORNER_RADIUS,
    FONT_BODY,
    FONT_BUTTON,
    FONT_TITLE,
    PADDING_LG,
    PADDING_SM,
    TEXT_LIGHT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)

_CARD_WIDTH: int = 380


class IndexView(ctk.CTkFrame):
    """Welcome screen.

    Parameters
    ----------
    parent:
        Content container provided by the shell.
    navigate:
        Router callback.
    """

    def __init__(self, parent: ctk.CTkFrame, navigate: Callable[[str], None]) -> None:
        super().__init__(parent, fg_color=CONTENT_BG)
        self._navigate = navigate

        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)
        self.grid_columnconfigure(0, weight=1)

        inner = ctk.CTkFrame(self, fg_color="transparent", width=_CARD_WIDTH)
        inner.grid(row=1, column=0)

        ctk.CTkLabel(
            inner,
            text="Welcome",
            font=FONT_TITLE,
            text_color=TEXT_PRIMARY,
        ).pack(pady=(0, PADDING_SM))

        ctk.CTkLabel(
            inner,
            text="Sign in to access your dashboard",
            font=FONT_BODY,
            text_color=TEXT_SECONDARY,
        ).pack(pady=(0, PADDING_LG))

        ctk.CTkButton(
            inner,
            text="Sign In",
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_LIGHT,
            width=_CARD_WIDTH,
            height=BUTTON_HEIGHT + 8,
            corner_radius=CORNER_RADIUS,
            command=lambda: self._navigate(Route.LOGIN),
        ).pack(fill="x")
