"""
Directory Search Filter.

Pure, side-effect-free derivation of the visible users from the loaded
set and a free-text query.  Recomputed on every keystroke.
"""

from __future__ import annotations

from typing import Iterable, Optional

from clinic_admin.models.user import UserRecord

# Fields a query is matched against (OR-combined).
SEARCHABLE_FIELDS: tuple[str, ...] = (
    "email",
    "first_name",
    "last_name",
    "role",
    "office_name",
)


def _field_text(value: Optional[object]) -> str:
    if value is None:
        return ""
    return str(value).lower()


def matches(user: UserRecord, query: str) -> bool:
    """``True`` when the lowercased *query* is a substring of any searchable field."""
    needle = query.lower()
    if not needle:
        return True
    return any(needle in _field_text(getattr(user, name)) for name in SEARCHABLE_FIELDS)


def filter_users(users: Iterable[UserRecord], query: str) -> list[UserRecord]:
    """Return the users matching *query*, in their original order.

    The result is always a subsequence of *users*: nothing is reordered,
    duplicated or inserted.  An empty query returns every user.
    """
    return [user for user in users if matches(user, query)]
