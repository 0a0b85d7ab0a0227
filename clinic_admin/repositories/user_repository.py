"""
User Repository.

Data access for the directory ``users`` table.  Rows are inserted by the
identity service's post-signup trigger, so this repository only reads
and updates them.
"""

from __future__ import annotations

from pydantic import ValidationError

from clinic_admin.gateway import SupabaseGateway
from clinic_admin.logger import StructuredLogger
from clinic_admin.models.user import LISTING_FIELDS, UserRecord
from clinic_admin.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository):
    """Data access layer for ``UserRecord`` entities.

    **No ``create()`` or ``delete()``.**  Every row corresponds 1:1 to an
    identity-service account and its lifecycle belongs to that service.
    """

    TABLE = "users"

    def __init__(
        self,
        gateway: SupabaseGateway,
        logger: StructuredLogger,
        table: str = "",
    ) -> None:
        super().__init__(gateway, logger, table)

    def list_recent(self) -> list[UserRecord]:
        """Fetch every user, most recently created first.

        Only the listing columns are requested; phone numbers stay on
        the server.  Ties in ``created_at`` keep whatever order the
        service returns.  A row that does not parse as ``UserRecord``
        (a role outside ``UserRole``, say) is logged and left out.

        Raises:
            GatewayOfflineError: Offline mode.
            Exception: Whatever the PostgREST client raises.
        """
        response = (
            self._table()
            .select(", ".join(LISTING_FIELDS))
            .order("created_at", desc=True)
            .execute()
        )
        users: list[UserRecord] = []
        for row in response.data or []:
            try:
                users.append(UserRecord.model_validate(row))
            except ValidationError as exc:
                self._logger.warning(
                    "Skipping malformed row in %s: %s",
                    self.table_name,
                    "; ".join(f"{e['loc'][0] if e['loc'] else '?'}: {e['msg']}" for e in exc.errors()),
                    extra={"row_id": str(row.get("id"))},
                )
        self._logger.debug("Fetched %d users from %s.", len(users), self.table_name)
        return users

    def update_profile(self, user_id: str, profile: dict[str, str]) -> None:
        """Write profile columns onto the row keyed by *user_id*.

        Raises:
            GatewayOfflineError: Offline mode.
            Exception: Whatever the PostgREST client raises.
        """
        (
            self._table()
            .update(profile)
            .eq("id", user_id)
            .execute()
        )
        self._logger.info(
            "Profile updated for user %s.", user_id,
            extra={"fields": ",".join(sorted(profile))},
        )
