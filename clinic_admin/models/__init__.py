"""
Data Models Package.

Re-exports the Pydantic models for short imports:
    from clinic_admin.models import UserRecord, NewUserInput, UserRole
    from clinic_admin.models import ServiceResult, Notification
"""

from __future__ import annotations

from clinic_admin.models.auth_models import AuthErrorCode, AuthResult, SessionState
from clinic_admin.models.enums import AuthEvent, NotificationVariant, Route, UserRole
from clinic_admin.models.service_models import Notification, ServiceResult
from clinic_admin.models.user import NewUserInput, UserRecord

__all__ = [
    "AuthErrorCode",
    "AuthEvent",
    "AuthResult",
    "NewUserInput",
    "Notification",
    "NotificationVariant",
    "Route",
    "ServiceResult",
    "SessionState",
    "UserRecord",
    "UserRole",
]
