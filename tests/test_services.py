from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from clinic_admin.auth import SessionManager
from clinic_admin.config import AppConfig
from clinic_admin.gateway import GatewayOfflineError, SupabaseGateway
from clinic_admin.logger import StructuredLogger
from clinic_admin.models.auth_models import SessionState
from clinic_admin.repositories.user_repository import UserRepository
from clinic_admin.services import create_services
from clinic_admin.services.auth_service import AuthService
from clinic_admin.services.directory import DirectoryService
from clinic_admin.services.users import UserService


def test_create_services_wires_every_service(
    gateway: SupabaseGateway,
    client: MagicMock,
    session: SessionManager,
    logger: StructuredLogger,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("USERS_TABLE", "clinic_users")
    services = create_services(gateway, AppConfig(_env_file=None), session, logger)

    assert isinstance(services["auth_service"], AuthService)
    assert isinstance(services["directory_service"], DirectoryService)
    assert isinstance(services["user_service"], UserService)

    client.table.return_value.select.return_value.order.return_value.execute.return_value = (
        SimpleNamespace(data=[])
    )
    services["directory_service"].load_users()
    client.table.assert_called_once_with("clinic_users")


def test_offline_gateway_raises_offline_error(offline_gateway: SupabaseGateway) -> None:
    with pytest.raises(GatewayOfflineError, match="SUPABASE_URL"):
        offline_gateway.supabase


def test_offline_error_maps_to_503_but_other_runtime_errors_to_500(
    directory_service: DirectoryService,
    offline_gateway: SupabaseGateway,
    client: MagicMock,
    logger: StructuredLogger,
) -> None:
    offline = DirectoryService(UserRepository(offline_gateway, logger), logger).load_users()
    assert offline.status_code == 503

    client.table.side_effect = RuntimeError("event loop is closed")
    broken = directory_service.load_users()
    assert not broken.success
    assert broken.status_code == 500
    assert broken.error == "event loop is closed"


def test_session_manager_snapshot() -> None:
    manager = SessionManager()
    assert manager.current_user_id == "unknown"
    assert manager.current_email == ""
    assert not manager.is_authenticated

    manager.set_session(SessionState(
        user_id="op-1",
        email="admin@clinic.com",
        access_token="t",
    ))
    assert manager.is_authenticated
    assert manager.current_user_id == "op-1"
    assert manager.current_email == "admin@clinic.com"

    manager.clear()
    assert manager.get_session() is None
