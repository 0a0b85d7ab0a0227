"""
User Models.

``UserRecord`` mirrors one row of the directory ``users`` table.
``NewUserInput`` is the validated payload of the creation form; nothing
reaches the identity service until it validates.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from clinic_admin.models.enums import DEFAULT_ROLE, UserRole

EMAIL_RE: re.Pattern[str] = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$"
)

PASSWORD_MIN_LENGTH: int = 6

# Columns requested by the directory listing, in display order.
LISTING_FIELDS: tuple[str, ...] = (
    "id",
    "email",
    "first_name",
    "last_name",
    "role",
    "office_name",
    "created_at",
)

# Columns written to the directory row after sign-up.
PROFILE_FIELDS: tuple[str, ...] = (
    "first_name",
    "last_name",
    "role",
    "office_name",
    "phone_number",
    "office_phone_number",
)

FIELD_LABELS: dict[str, str] = {
    "email": "Email",
    "password": "Password",
    "first_name": "First name",
    "last_name": "Last name",
    "role": "Role",
    "office_name": "Office name",
    "phone_number": "Phone number",
    "office_phone_number": "Office phone number",
}


class UserRecord(BaseModel):
    """One directory entry.

    The row is inserted by the identity service's post-signup trigger, so
    every profile attribute may still be empty when it is first read.
    ``id`` and ``created_at`` never change after insertion.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str  # identity-service UUID
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[UserRole] = None
    office_name: Optional[str] = None
    phone_number: Optional[str] = None
    office_phone_number: Optional[str] = None
    created_at: datetime

    @field_validator("role", mode="before")
    @classmethod
    def _blank_role_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def full_name(self) -> str:
        """``"First Last"``, or an empty string when neither is set."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class NewUserInput(BaseModel):
    """Validated input of the user creation form.

    Every field is required and must not be blank.  ``password`` must be
    at least ``PASSWORD_MIN_LENGTH`` characters and is never stripped;
    ``email`` must look like an address; ``role`` defaults to ``DOCTOR``.
    """

    email: str
    password: str
    first_name: str
    last_name: str
    role: UserRole = DEFAULT_ROLE
    office_name: str
    phone_number: str
    office_phone_number: str

    @field_validator(
        "first_name",
        "last_name",
        "office_name",
        "phone_number",
        "office_phone_number",
    )
    @classmethod
    def _not_blank(cls, value: str, info: ValidationInfo) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError(f"{FIELD_LABELS[info.field_name]} is required.")
        return stripped

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Email is required.")
        if not EMAIL_RE.match(stripped):
            raise ValueError("Please enter a valid email address.")
        return stripped

    @field_validator("password")
    @classmethod
    def _password_length(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required.")
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValueError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters."
            )
        return value

    @field_validator("role", mode="before")
    @classmethod
    def _known_role(cls, value: object) -> object:
        if isinstance(value, UserRole):
            return value
        if value in (None, ""):
            return DEFAULT_ROLE
        try:
            return UserRole(str(value))
        except ValueError:
            raise ValueError(
                "Role must be one of: " + ", ".join(r.value for r in UserRole) + "."
            ) from None

    def profile(self) -> dict[str, str]:
        """Directory columns to write once the identity exists."""
        data = self.model_dump(include=set(PROFILE_FIELDS))
        data["role"] = str(self.role)
        return data
