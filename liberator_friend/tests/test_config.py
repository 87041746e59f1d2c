from __future__ import annotations

import pydantic
import pytest

from liberator_friend.shared.config import AppConfig, AuthConfig, ServerConfig
from liberator_friend.shared.logging import (
    clear_request_context,
    get_correlation_id,
    sanitize_message,
    set_correlation_id,
)


def test_auth_defaults() -> None:
    auth = AuthConfig()

    assert auth.login_uri == "/login"
    assert auth.logout_uri == "/logout"
    assert auth.landing_uri == "/"
    assert auth.allow_basic_auth is True


def test_auth_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOGIN_URI", "/sign-in")
    monkeypatch.setenv("ALLOW_BASIC_AUTH", "no")

    auth = AuthConfig()

    assert auth.login_uri == "/sign-in"
    assert auth.allow_basic_auth is False


def test_auth_rejects_relative_uri() -> None:
    with pytest.raises(pydantic.ValidationError):
        AuthConfig(login_uri="login")


def test_server_port_range() -> None:
    assert ServerConfig(port=9000).port == 9000
    with pytest.raises(pydantic.ValidationError):
        ServerConfig(port=0)


def test_log_level_is_uppercased() -> None:
    assert AppConfig(log_level="debug").log_level == "DEBUG"


def test_production_refuses_default_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")

    with pytest.raises(SystemExit):
        AppConfig(secret_key="dev")

    assert AppConfig(secret_key="a-long-random-value").is_production()


def test_sanitize_message_redacts_credentials() -> None:
    assert sanitize_message("password=hunter2") == "password=***REDACTED***"
    assert "abc123" not in sanitize_message("{'Authorization': 'Basic abc123'}")


def test_correlation_id_lifecycle() -> None:
    set_correlation_id("req-1")
    assert get_correlation_id() == "req-1"

    clear_request_context()
    assert get_correlation_id() == "-"
