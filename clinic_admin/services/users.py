"""
User Creation Service.

Creates directory accounts in two phases:

1. Register the identity (email + password) with the identity service.
   Its post-signup trigger inserts the matching ``users`` row.
2. Only if phase 1 returned an identity, write the profile columns onto
   that row.

Architectural notes:
    - Validation runs before any network call; an invalid form never
      reaches the identity service.
    - There is no rollback.  If phase 2 fails the identity exists with an
      empty profile; this is logged as a ``CREATE_USER_PARTIAL`` audit
      event so an administrator can complete or remove it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Union

from pydantic import ValidationError

from clinic_admin.auth import SessionManager
from clinic_admin.logger import StructuredLogger
from clinic_admin.models.service_models import ServiceResult
from clinic_admin.models.user import NewUserInput
from clinic_admin.repositories.user_repository import UserRepository
from clinic_admin.services.auth_service import AuthService
from clinic_admin.services.base_service import BaseService
from clinic_admin.utils.audit import log_audit_event
from clinic_admin.utils.errors import first_validation_message

CREATE_FALLBACK: str = "Failed to create user"
CREATE_SUCCESS: str = "User has been created successfully"


class UserService(BaseService):
    """Service layer for creating directory users."""

    def __init__(
        self,
        auth_service: AuthService,
        repo: UserRepository,
        session: SessionManager,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(logger)
        self._auth_service = auth_service
        self._repo = repo
        self._session = session

    @staticmethod
    def validate(form: Union[NewUserInput, Mapping[str, object]]) -> ServiceResult[NewUserInput]:
        """Client-side validation of the creation form."""
        if isinstance(form, NewUserInput):
            return ServiceResult(success=True, data=form)
        try:
            return ServiceResult(success=True, data=NewUserInput.model_validate(dict(form)))
        except ValidationError as exc:
            return ServiceResult(
                success=False,
                error=first_validation_message(exc),
                status_code=422,
            )

    def create_user(
        self,
        form: Union[NewUserInput, Mapping[str, object]],
    ) -> ServiceResult[str]:
        """Register an identity and fill in its directory profile.

        Args:
            form: ``NewUserInput`` or a mapping with ``email``,
                ``password``, ``first_name``, ``last_name``, ``role``,
                ``office_name``, ``phone_number``, ``office_phone_number``.

        Returns:
            ``ServiceResult`` whose ``data`` is the new identity id.  On
            failure ``error`` holds the service's message, or
            ``CREATE_FALLBACK`` when none was given.
        """
        # --- 0. Client-side validation ---
        checked = self.validate(form)
        if not checked.success or checked.data is None:
            return ServiceResult(
                success=False,
                error=checked.error or CREATE_FALLBACK,
                status_code=checked.status_code,
            )
        new_user: NewUserInput = checked.data

        # --- 1. Register the identity ---
        auth_result = self._auth_service.sign_up(new_user.email, new_user.password)
        if not auth_result.success:
            return ServiceResult(
                success=False,
                error=auth_result.error_message or CREATE_FALLBACK,
                status_code=400,
            )
        if auth_result.user_id is None:
            # Accepted but no identity came back: nothing to profile.
            return ServiceResult(success=False, error=CREATE_FALLBACK, status_code=502)
        new_id = auth_result.user_id

        # --- 2. Fill in the directory row created by the trigger ---
        try:
            self._repo.update_profile(new_id, new_user.profile())
        except Exception as exc:
            failed = self._failure(exc, CREATE_FALLBACK, f"Profile update for {new_id}")
            message = failed.error or CREATE_FALLBACK
            log_audit_event(
                logger=self._logger,
                action="CREATE_USER_PARTIAL",
                entity_type="User",
                entity_id=new_id,
                user_id=self._session.current_user_id,
                details={"email": new_user.email, "error": message},
            )
            return ServiceResult(success=False, error=message, status_code=failed.status_code)

        # --- 3. Audit trail ---
        log_audit_event(
            logger=self._logger,
            action="CREATE_USER",
            entity_type="User",
            entity_id=new_id,
            user_id=self._session.current_user_id,
            details={
                "email": new_user.email,
                "role": str(new_user.role),
                "office_name": new_user.office_name,
            },
        )
        return ServiceResult(success=True, data=new_id, status_code=201)
