"""
Supabase Connection Gateway.

Owns the single Supabase client used by the whole application.  The
hosted project is the identity service (``client.auth``) and the
directory store (``client.table("users")``) at the same time.

This module only manages the *connection*; it contains no query logic.
Data access goes through the repositories and the auth service.

Usage (dependency injection at app startup)::

    from clinic_admin.gateway import SupabaseGateway
    from clinic_admin.logger import StructuredLogger

    gateway = SupabaseGateway(
        supabase_url=config.SUPABASE_URL,
        supabase_key=config.SUPABASE_ANON_KEY.get_secret_value(),
        logger=StructuredLogger(name="gateway"),
    )
"""

from __future__ import annotations

from typing import Optional

from supabase import Client as SupabaseClient
from supabase import create_client

from clinic_admin.logger import StructuredLogger


class GatewayOfflineError(RuntimeError):
    """Raised on client access while the gateway runs in offline mode."""


class SupabaseGateway:
    """Holds the Supabase client, configured at construction time.

    When ``supabase_url`` or ``supabase_key`` is empty, or the client
    cannot be created, the gateway runs in *offline* mode: accessing
    :pyattr:`supabase` raises ``GatewayOfflineError``, which every service
    catches and turns into a user-facing message.

    Parameters
    ----------
    supabase_url:
        The Supabase project URL (e.g. ``https://xyz.supabase.co``).
    supabase_key:
        The project's anonymous key.
    logger:
        A ``StructuredLogger`` instance.
    client:
        A ready-made client.  Skips ``create_client``; used by tests and
        by callers that build the client themselves.
    """

    def __init__(
        self,
        supabase_url: str,
        supabase_key: str,
        logger: StructuredLogger,
        client: Optional[SupabaseClient] = None,
    ) -> None:
        self._logger: StructuredLogger = logger
        self._supabase: Optional[SupabaseClient] = client

        if self._supabase is not None:
            return

        if not (supabase_url and supabase_key):
            self._logger.warning(
                "Supabase credentials not configured; running in offline mode."
            )
            return

        try:
            self._supabase = create_client(supabase_url, supabase_key)
            self._logger.info("Supabase client initialized.")
        except (ValueError, TypeError) as exc:
            self._logger.warning(
                "Supabase credential format error: %s. Running in offline mode.",
                exc,
            )
        except Exception as exc:
            self._logger.error(
                "Unexpected Supabase initialization failure: %s. "
                "Running in offline mode.",
                exc,
                exc_info=True,
            )

    @property
    def supabase(self) -> SupabaseClient:
        """Return the initialised Supabase client.

        Raises
        ------
        GatewayOfflineError
            If the client was not initialised (offline mode).
        """
        if self._supabase is None:
            raise GatewayOfflineError(
                "Supabase client is not initialised. "
                "Check SUPABASE_URL and SUPABASE_ANON_KEY."
            )
        return self._supabase
