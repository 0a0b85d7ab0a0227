"""
Structured Audit Logging Utility.

Every state change in the directory (sign-in, sign-out, account creation,
half-finished account creation) is logged as one validated JSON object.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, Field

from clinic_admin.logger import StructuredLogger

__all__ = ["AuditEvent", "log_audit_event"]

# Scalar values only; nested structures should be modelled explicitly.
DetailValue = Union[str, int, float, bool, None]


class AuditEvent(BaseModel):
    """Schema-validated representation of a single audit trail entry."""

    timestamp: str
    action: str
    entity_type: str
    entity_id: str
    user_id: str
    details: dict[str, DetailValue] = Field(default_factory=dict)


def log_audit_event(
    logger: StructuredLogger,
    action: str,
    entity_type: str,
    entity_id: str,
    user_id: str,
    details: Optional[dict[str, DetailValue]] = None,
) -> AuditEvent:
    """Validate and emit an ``AUDIT:`` log line; return the event.

    Args:
        logger: The logger instance to write to.
        action: What happened (e.g. ``"LOGIN"``, ``"CREATE_USER"``,
            ``"CREATE_USER_PARTIAL"``).
        entity_type: Type of entity affected (e.g. ``"User"``, ``"Session"``).
        entity_id: Identifier of the affected entity.
        user_id: Identity id of the operator, or ``"unknown"``.
        details: Optional additional context.  Never pass passwords.
    """
    event = AuditEvent(
        timestamp=datetime.now(timezone.utc).isoformat(),
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        user_id=user_id,
        details=details or {},
    )
    logger.info("AUDIT: %s", json.dumps(event.model_dump(), default=str))
    return event
