# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_WEAK_SECRETS = frozenset({"", "dev", "development", "test", "secret"})


def _as_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///chat_app.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(env_file=".env", validate_by_name=True, extra="ignore")


class AuthConfig(BaseSettings):
    jwt_secret: str = Field("dev", alias="JWT_SECRET")
    # None keeps tokens without an `exp` claim.
    jwt_expires_minutes: int | None = Field(None, ge=1, alias="JWT_EXPIRES_MINUTES")
    bootstrap_admin_username: str | None = Field(None, alias="BOOTSTRAP_ADMIN_USERNAME")
    bootstrap_admin_password: str | None = Field(None, alias="BOOTSTRAP_ADMIN_PASSWORD")

    model_config = SettingsConfigDict(env_file=".env", validate_by_name=True, extra="ignore")


class SecurityConfig(BaseSettings):
    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = SettingsConfigDict(env_file=".env", validate_by_name=True, extra="ignore")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _as_bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, ge=1, le=65535, alias="PORT")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

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
        return _as_bool(value)

    @model_validator(mode="after")
    def _check_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.auth.jwt_secret in _WEAK_SECRETS:
            print(
                "\n❌ JWT_SECRET is unset or a development value while APP_ENV=production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        for warning in self._production_warnings():
            print(f"⚠️  {warning}", file=sys.stderr)
        return self

    def _production_warnings(self) -> list[str]:
        warnings = []
        if "*" in self.security.allowed_origins:
            warnings.append("CORS allows any origin (ALLOWED_ORIGINS=*)")
        if not self.security.enable_hsts:
            warnings.append("HSTS is disabled (ENABLE_HSTS=false)")
        if self.auth.jwt_expires_minutes is None:
            warnings.append("session tokens never expire (JWT_EXPIRES_MINUTES unset)")
        return warnings

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "AuthConfig", "DatabaseConfig", "SecurityConfig", "load_config"]
