"""
Error Message Helpers.

The Supabase client reports failures by raising (``AuthApiError`` from the
auth client, ``APIError`` from PostgREST).  Both carry the service's own
wording in a ``message`` attribute; these helpers pull it out so the
operator sees exactly what the service said.
"""

from __future__ import annotations

from pydantic import ValidationError

from clinic_admin.models.user import FIELD_LABELS

__all__ = ["first_validation_message", "service_message"]


def service_message(exc: BaseException, fallback: str) -> str:
    """Return the service-provided message of *exc*, else *fallback*.

    Looks at ``exc.message`` first, then ``str(exc)``.  Blank values count
    as missing.  A pydantic ``ValidationError`` is a local parse failure,
    not something the service said, so it always yields *fallback*.
    """
    if isinstance(exc, ValidationError):
        return fallback
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message.strip():
        return message.strip()
    text = str(exc).strip()
    return text or fallback


def first_validation_message(exc: ValidationError) -> str:
    """Human-readable message for the first error of a pydantic validation.

    ``ValueError`` raised by our own validators is shown verbatim; a missing
    or non-string field becomes ``"<Label> is required."``.
    """
    errors = exc.errors()
    if not errors:
        return "Invalid input."
    first = errors[0]
    field = str(first["loc"][0]) if first.get("loc") else ""
    label = FIELD_LABELS.get(field, field.replace("_", " ").capitalize() or "Value")

    if first["type"] == "value_error":
        ctx_error = first.get("ctx", {}).get("error")
        if ctx_error is not None:
            return str(ctx_error)
    if first["type"] in ("missing", "string_type", "none_required"):
        return f"{label} is required."
    return f"{label}: {first['msg']}"
