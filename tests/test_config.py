from __future__ import annotations

import logging

import pytest

from clinic_admin.config import AppConfig, get_config, reset_config


def test_defaults_allow_offline_start(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)

    config = AppConfig(_env_file=None)

    assert config.SUPABASE_URL == ""
    assert config.SUPABASE_ANON_KEY.get_secret_value() == ""
    assert config.USERS_TABLE == "users"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://demo.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = AppConfig(_env_file=None)

    assert config.SUPABASE_URL == "https://demo.supabase.co"
    assert config.SUPABASE_ANON_KEY.get_secret_value() == "anon-key"
    assert "anon-key" not in repr(config)
    assert config.log_level == logging.DEBUG


def test_unknown_log_level_falls_back_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert AppConfig(_env_file=None).log_level == logging.INFO


def test_missing_credentials_emit_warning(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    caplog.set_level(logging.WARNING, logger="clinic_admin.config")

    AppConfig(_env_file=None)

    assert any("SUPABASE_URL" in r.getMessage() for r in caplog.records)


def test_get_config_is_a_singleton_until_reset(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_config()
    assert get_config() is first

    monkeypatch.setenv("USERS_TABLE", "staff")
    reset_config()

    assert get_config() is not first
    assert get_config().USERS_TABLE == "staff"
