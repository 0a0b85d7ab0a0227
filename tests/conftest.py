"""Shared fixtures: a mocked Supabase client behind a real gateway."""

from __future__ import annotations

import os

# No rotating log file during tests; must be set before the config is read.
os.environ["LOG_FILE"] = ""

from types import SimpleNamespace
from typing import Any, Callable, Iterator, Optional
from unittest.mock import MagicMock

import pytest

from clinic_admin.auth import SessionManager
from clinic_admin.config import reset_config
from clinic_admin.gateway import SupabaseGateway
from clinic_admin.logger import StructuredLogger
from clinic_admin.repositories.user_repository import UserRepository
from clinic_admin.services.auth_service import AuthService
from clinic_admin.services.directory import DirectoryService
from clinic_admin.services.users import UserService
from factories import make_session


@pytest.fixture(autouse=True)
def _fresh_config() -> Iterator[None]:
    reset_config()
    yield
    reset_config()


@pytest.fixture
def logger() -> StructuredLogger:
    return StructuredLogger(name="tests", log_to_file=False)


@pytest.fixture
def client() -> MagicMock:
    """MagicMock standing in for ``supabase.Client``; a session exists by default."""
    mock = MagicMock(name="supabase")
    mock.auth.get_session.return_value = make_session()
    return mock


@pytest.fixture
def gateway(client: MagicMock, logger: StructuredLogger) -> SupabaseGateway:
    return SupabaseGateway("https://example.supabase.co", "anon", logger, client=client)


@pytest.fixture
def offline_gateway(logger: StructuredLogger) -> SupabaseGateway:
    return SupabaseGateway("", "", logger)


@pytest.fixture
def session() -> SessionManager:
    return SessionManager()


@pytest.fixture
def auth_service(
    gateway: SupabaseGateway, session: SessionManager, logger: StructuredLogger,
) -> AuthService:
    return AuthService(gateway=gateway, session=session, logger=logger)


@pytest.fixture
def user_repo(gateway: SupabaseGateway, logger: StructuredLogger) -> UserRepository:
    return UserRepository(gateway=gateway, logger=logger)


@pytest.fixture
def directory_service(user_repo: UserRepository, logger: StructuredLogger) -> DirectoryService:
    return DirectoryService(repo=user_repo, logger=logger)


@pytest.fixture
def user_service(
    auth_service: AuthService,
    user_repo: UserRepository,
    session: SessionManager,
    logger: StructuredLogger,
) -> UserService:
    return UserService(
        auth_service=auth_service, repo=user_repo, session=session, logger=logger,
    )


@pytest.fixture
def users_query(client: MagicMock) -> Callable[..., MagicMock]:
    """Configure what ``table().select().order().execute()`` returns or raises."""

    def _configure(
        rows: Optional[list[dict[str, Any]]] = None,
        error: Optional[Exception] = None,
    ) -> MagicMock:
        execute = client.table.return_value.select.return_value.order.return_value.execute
        if error is not None:
            execute.side_effect = error
        else:
            execute.return_value = SimpleNamespace(data=rows or [])
        return execute

    return _configure
