from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from liberator_friend.app import create_app
from liberator_friend.shared.config import AppConfig, AuthConfig


@pytest.fixture()
def config() -> AppConfig:
    return AppConfig(
        app_env="test",
        secret_key="test-secret",
        auth=AuthConfig(password_hash_method="pbkdf2:sha256:1000"),
    )


@pytest.fixture()
def app(config: AppConfig) -> Flask:
    return create_app(config)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()
