"""
Service Layer Data Transfer Objects.

Result envelopes returned by every service and the notification payload
handed to the toast surface.  The UI never inspects raw exceptions.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from clinic_admin.models.enums import NotificationVariant

T = TypeVar("T")

__all__ = [
    "Notification",
    "ServiceResult",
]


class ServiceResult(BaseModel, Generic[T]):
    """
    Standard service return envelope.

    Generic over ``T`` so callers can annotate precisely, e.g.
    ``ServiceResult[list[UserRecord]]``.  ``error`` carries the message
    to show the operator; ``status_code`` follows HTTP conventions so
    logs read the same way as the hosted service's own.
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    status_code: int = 200


class Notification(BaseModel):
    """A toast: short title, one-line description, visual variant."""

    title: str
    description: str = ""
    variant: NotificationVariant = NotificationVariant.DEFAULT

    @classmethod
    def success(cls, description: str) -> "Notification":
        return cls(title="Success", description=description)

    @classmethod
    def error(cls, description: str) -> "Notification":
        return cls(
            title="Error",
            description=description,
            variant=NotificationVariant.DESTRUCTIVE,
        )
