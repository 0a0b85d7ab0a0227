"""Shared utility functions and models for the Clinic Directory Admin client.

Convenience re-exports so consumers can write ``from clinic_admin.utils
import service_message`` as well as the full module path.
"""

from clinic_admin.utils.audit import AuditEvent, log_audit_event
from clinic_admin.utils.errors import first_validation_message, service_message

__all__ = [
    "AuditEvent",
    "first_validation_message",
    "log_audit_event",
    "service_message",
]
