"""
Business Logic Services Package.

Services depend on the repository layer for data access and on the
auth service for identity concerns.

The ``create_services()`` factory wires every repository and service
together, returning a typed dict the UI layer consumes without knowing
the dependency graph.
"""

from __future__ import annotations

from typing import Optional, TypedDict

from clinic_admin.auth import SessionManager
from clinic_admin.config import AppConfig
from clinic_admin.gateway import SupabaseGateway
from clinic_admin.logger import StructuredLogger, get_logger
from clinic_admin.repositories.user_repository import UserRepository
from clinic_admin.services.auth_service import AuthService
from clinic_admin.services.directory import DirectoryService
from clinic_admin.services.users import UserService


class ServiceContainer(TypedDict):
    """Typed container for all application services."""

    auth_service: AuthService
    directory_service: DirectoryService
    user_service: UserService


def create_services(
    gateway: SupabaseGateway,
    config: AppConfig,
    session: SessionManager,
    logger: Optional[StructuredLogger] = None,
) -> ServiceContainer:
    """
    Wire all repositories and services together.

    This is the single composition root for the service layer.  The
    entry point calls it once at startup.

    Args:
        gateway: Connection gateway (may be offline).
        config: Application configuration.
        session: Shared local session snapshot.
        logger: Logger for every service; ``get_logger("services")``
            when omitted.

    Returns:
        ServiceContainer mapping service names to fully-wired instances.
    """
    logger = logger or get_logger("services")

    # ------------------------------------------------------------------
    # 1. Repositories
    # ------------------------------------------------------------------
    user_repo = UserRepository(gateway=gateway, logger=logger, table=config.USERS_TABLE)

    # ------------------------------------------------------------------
    # 2. Services
    # ------------------------------------------------------------------
    auth_service = AuthService(gateway=gateway, session=session, logger=logger)
    directory_service = DirectoryService(repo=user_repo, logger=logger)
    user_service = UserService(
        auth_service=auth_service,
        repo=user_repo,
        session=session,
        logger=logger,
    )

    return ServiceContainer(
        auth_service=auth_service,
        directory_service=directory_service,
        user_service=user_service,
    )
