"""
Base Service Class.

Shared logger plus the conversion of a raised Supabase failure into a
failed ``ServiceResult``.  Services take their repository dependencies
via __init__.
"""

from __future__ import annotations

from typing import Any

from clinic_admin.gateway import GatewayOfflineError
from clinic_admin.logger import StructuredLogger
from clinic_admin.models.service_models import ServiceResult
from clinic_admin.utils.errors import service_message


class BaseService:
    """Base class for directory and account services."""

    def __init__(self, logger: StructuredLogger) -> None:
        self._logger: StructuredLogger = logger

    def _failure(self, exc: Exception, fallback: str, action: str) -> ServiceResult[Any]:
        """Log *exc* and wrap it in a failed result.

        ``GatewayOfflineError`` is the gateway's offline signal (status
        503); anything else is a service-side failure (status 500).  The
        error text is the service's own message, or *fallback*.
        """
        message = service_message(exc, fallback)
        if isinstance(exc, GatewayOfflineError):
            self._logger.warning("%s: service unavailable: %s", action, message)
            return ServiceResult(success=False, error=message, status_code=503)
        self._logger.error("%s failed: %s", action, message)
        return ServiceResult(success=False, error=message, status_code=500)
