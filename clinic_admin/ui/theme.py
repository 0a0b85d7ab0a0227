"""UI Theme Constants for Clinic Directory Admin.

Centralises colour, font, and sizing constants for the CustomTkinter
interface: a dark navigation bar over a light content area.

This file contains **zero logic**, only ``Final`` constants.
"""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------

NAV_BG: Final[str] = "#1f2937"
NAV_TEXT: Final[str] = "#f9fafb"

CONTENT_BG: Final[str] = "#f3f4f6"
CONTENT_CARD_BG: Final[str] = "#ffffff"
ROW_ALT_BG: Final[str] = "#f9fafb"
TABLE_HEADER_BG: Final[str] = "#e5e7eb"

ACCENT_PRIMARY: Final[str] = "#2563eb"
ACCENT_HOVER: Final[str] = "#1d4ed8"
TEXT_PRIMARY: Final[str] = "#111827"
TEXT_SECONDARY: Final[str] = "#6b7280"
TEXT_LIGHT: Final[str] = "#ffffff"

INPUT_BG: Final[str] = "#ffffff"
INPUT_BORDER: Final[str] = "#d1d5db"
ERROR_TEXT: Final[str] = "#dc2626"

OUTLINE_HOVER: Final[str] = "#e5e7eb"

# Toast variants
TOAST_DEFAULT_BG: Final[str] = "#111827"
TOAST_DESTRUCTIVE_BG: Final[str] = "#b91c1c"

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------

FONT_FAMILY: Final[str] = "Segoe UI"
FONT_TITLE: Final[tuple[str, int, str]] = (FONT_FAMILY, 30, "bold")
FONT_HEADING: Final[tuple[str, int, str]] = (FONT_FAMILY, 20, "bold")
FONT_BODY: Final[tuple[str, int]] = (FONT_FAMILY, 13)
FONT_LABEL: Final[tuple[str, int, str]] = (FONT_FAMILY, 12, "bold")
FONT_SMALL: Final[tuple[str, int]] = (FONT_FAMILY, 11)
FONT_BUTTON: Final[tuple[str, int, str]] = (FONT_FAMILY, 13, "bold")

# ---------------------------------------------------------------------------
# Dimensions
# ---------------------------------------------------------------------------

MAIN_WINDOW_WIDTH: Final[int] = 1100
MAIN_WINDOW_HEIGHT: Final[int] = 720
MIN_WINDOW_WIDTH: Final[int] = 640
MIN_WINDOW_HEIGHT: Final[int] = 480
NAV_HEIGHT: Final[int] = 56
FORM_WIDTH: Final[int] = 520
INPUT_HEIGHT: Final[int] = 40
BUTTON_HEIGHT: Final[int] = 42
CORNER_RADIUS: Final[int] = 8
PADDING_SM: Final[int] = 8
PADDING_MD: Final[int] = 16
PADDING_LG: Final[int] = 24

TOAST_DURATION_MS: Final[int] = 4_000
