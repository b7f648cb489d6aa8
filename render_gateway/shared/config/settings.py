# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _parse_flag(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class AccountConfig(BaseModel):
    """One entry of the RENDER_ACCOUNTS JSON array."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    api_key: SecretStr = Field(alias="apiKey")

    model_config = ConfigDict(validate_by_name=True, frozen=True)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///gateway.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", validate_by_name=True, frozen=True
    )


class UpstreamConfig(BaseSettings):
    base_url: str = Field("https://api.render.com/v1", alias="RENDER_API_BASE_URL")
    timeout: float = Field(30.0, ge=0.1, alias="RENDER_API_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", validate_by_name=True, frozen=True
    )


class SecurityConfig(BaseSettings):
    # Cookie security
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", validate_by_name=True, frozen=True
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("cookie_secure", "enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _parse_flag(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _upstream_config_factory() -> UpstreamConfig:
    return UpstreamConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    admin_username: str = Field("admin", min_length=1, alias="ADMIN_USERNAME")
    admin_password: SecretStr = Field(SecretStr(""), alias="ADMIN_PASSWORD")
    render_accounts: list[AccountConfig] = Field(default_factory=list, alias="RENDER_ACCOUNTS")
    session_namespace: str = Field("session", min_length=1, alias="SESSION_NAMESPACE")
    session_ttl: int = Field(86400, ge=60, alias="SESSION_TTL")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: str | None = Field(None, alias="LOG_FILE")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    upstream: UpstreamConfig = Field(default_factory=_upstream_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
        frozen=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_flag(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if not self.admin_password.get_secret_value():
            print(
                "\n❌ CRITICAL SECURITY ERROR: ADMIN_PASSWORD is not set in production!\n"
                "   The operator login is disabled without it.\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if not self.render_accounts:
            warnings.append("⚠️  RENDER_ACCOUNTS is empty, the dashboard will show nothing")
        if not self.security.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)
            print(
                "   Consider enabling these security features in production.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AccountConfig",
    "AppConfig",
    "DatabaseConfig",
    "SecurityConfig",
    "UpstreamConfig",
    "load_config",
]
