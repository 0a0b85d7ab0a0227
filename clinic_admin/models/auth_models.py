"""
Authentication Models.

Pydantic models and enumerations for the contracts between
``AuthService`` and the rest of the application.  Every auth operation
returns a structured, inspectable result rather than raising.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel


class AuthErrorCode(StrEnum):
    """Categories of authentication failure."""

    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    NETWORK_ERROR = "network_error"
    VALIDATION_ERROR = "validation_error"
    OFFLINE = "offline"
    UNKNOWN_ERROR = "unknown_error"


# Substrings of identity-service error messages and the category each
# one belongs to.  The message itself is still shown verbatim.
SUPABASE_ERROR_CODES: dict[str, AuthErrorCode] = {
    "invalid login credentials": AuthErrorCode.INVALID_CREDENTIALS,
    "invalid_credentials": AuthErrorCode.INVALID_CREDENTIALS,
    "invalid_grant": AuthErrorCode.INVALID_CREDENTIALS,
    "already registered": AuthErrorCode.EMAIL_ALREADY_EXISTS,
    "user_already_exists": AuthErrorCode.EMAIL_ALREADY_EXISTS,
}


class ValidationResult(BaseModel):
    """Result of a single client-side field check."""

    is_valid: bool
    error_message: Optional[str] = None


class AuthResult(BaseModel):
    """Unified response for sign-in, sign-up and sign-out.

    Attributes
    ----------
    success:
        ``True`` when the operation completed without error.
    error_code:
        Structured error category (``None`` on success).
    error_message:
        Message to show the operator (``None`` on success).  Carries the
        identity service's own wording whenever it supplied one.
    user_id:
        Identity id of the signed-in or newly registered user.  ``None``
        after a sign-up that did not yield an identity.
    email:
        The normalised email address.
    """

    success: bool
    error_code: Optional[AuthErrorCode] = None
    error_message: Optional[str] = None
    user_id: Optional[str] = None
    email: Optional[str] = None


class SessionState(BaseModel):
    """Snapshot of the identity service's current session.

    Owned by the identity service; the application only observes it.
    """

    user_id: str
    email: Optional[str] = None
    access_token: str
