# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthConfig(BaseSettings):
    login_uri: str = Field("/login", alias="LOGIN_URI")
    logout_uri: str = Field("/logout", alias="LOGOUT_URI")
    landing_uri: str = Field("/", alias="LANDING_URI")
    password_hash_method: str = Field("scrypt", alias="PASSWORD_HASH_METHOD")
    allow_basic_auth: bool = Field(True, alias="ALLOW_BASIC_AUTH")
    realm: str = Field("liberator-friend", alias="AUTH_REALM")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", validate_by_name=True
    )

    @field_validator("login_uri", "logout_uri", "landing_uri", mode="after")
    @classmethod
    def _absolute_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("uri must be an absolute path")
        return value

    @field_validator("allow_basic_auth", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


class ServerConfig(BaseSettings):
    host: str = Field("127.0.0.1", alias="HOST")
    port: int = Field(8080, ge=1, le=65535, alias="PORT")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", validate_by_name=True
    )


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _server_config_factory() -> ServerConfig:
    return ServerConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: str | None = Field(None, alias="LOG_FILE")

    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    server: ServerConfig = Field(default_factory=_server_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        validate_by_name=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @field_validator("log_level", mode="after")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in ("dev", "development", "test", ""):
            print(
                "\nCRITICAL SECURITY ERROR: Insecure SECRET_KEY detected in production!\n"
                "   Session cookies are signed with SECRET_KEY, set a strong random value.\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if self.auth.allow_basic_auth:
            print(
                "\nWARNING: HTTP Basic authentication is enabled in production "
                "(terminate TLS in front of this app).\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "AuthConfig", "ServerConfig", "load_config"]
