"""
Base Repository.

Shared plumbing for repositories: the gateway reference, the logger, and
a convenience accessor for the table the repository owns.
"""

from __future__ import annotations

from supabase import Client as SupabaseClient

from clinic_admin.gateway import SupabaseGateway
from clinic_admin.logger import StructuredLogger


class BaseRepository:
    """Base class for all repositories. Receives dependencies via __init__.

    Repositories raise on failure (``GatewayOfflineError`` when offline, the
    client's own exceptions otherwise).  Turning failures into messages
    is the service layer's job.
    """

    TABLE: str = ""

    def __init__(
        self,
        gateway: SupabaseGateway,
        logger: StructuredLogger,
        table: str = "",
    ) -> None:
        self._gateway = gateway
        self._logger = logger
        self._table_name: str = table or self.TABLE

    @property
    def supabase(self) -> SupabaseClient:
        """The Supabase client; raises ``GatewayOfflineError`` in offline mode."""
        return self._gateway.supabase

    @property
    def table_name(self) -> str:
        return self._table_name

    def _table(self):  # -> postgrest SyncRequestBuilder
        return self.supabase.table(self._table_name)
