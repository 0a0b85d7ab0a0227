"""
Shared Enumerations for Clinic Directory Admin Models.

StrEnum values compare equal to their string equivalents, so a role read
back from the directory as ``"DOCTOR"`` equals ``UserRole.DOCTOR``.
"""

from __future__ import annotations

from enum import StrEnum


class UserRole(StrEnum):
    """Closed set of directory roles.

    No ordering semantics; used for display, filtering and the creation
    form.  Note the space in ``"CLINICAL SPECIALIST"``: the stored value
    is the display label.
    """

    DOCTOR = "DOCTOR"
    PT = "PT"
    TRAINER = "TRAINER"
    ADMIN = "ADMIN"
    COACH = "COACH"
    ATHLETE = "ATHLETE"
    PATIENT = "PATIENT"
    CLINICAL_SPECIALIST = "CLINICAL SPECIALIST"


DEFAULT_ROLE: UserRole = UserRole.DOCTOR


class NotificationVariant(StrEnum):
    """Visual weight of a toast notification."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class AuthEvent(StrEnum):
    """Session-change events emitted by the identity service.

    Only ``SIGNED_OUT`` matters to the session guard; the others are
    listed so incoming event strings can be parsed without surprises.
    """

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    USER_DELETED = "USER_DELETED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"
    MFA_CHALLENGE_VERIFIED = "MFA_CHALLENGE_VERIFIED"


class Route(StrEnum):
    """Named navigation destinations."""

    INDEX = "/"
    LOGIN = "/login"
    DASHBOARD = "/dashboard"
    ADD_USER = "/dashboard/add"
