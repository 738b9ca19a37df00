# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_SECRETS = ("dev", "development", "test", "secret", "")


def _settings_config() -> SettingsConfigDict:
    return SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
    )


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///authcore.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _settings_config()


class AuthConfig(BaseSettings):
    signing_secret: SecretStr = Field(SecretStr("dev"), alias="SIGNING_SECRET")
    signing_algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        "HS256", alias="SIGNING_ALGORITHM"
    )
    hash_method: Literal["scrypt", "pbkdf2"] = Field("scrypt", alias="HASH_METHOD")
    # scrypt: log2(N); pbkdf2: iteration count
    hash_cost_factor: int = Field(15, ge=1, alias="HASH_COST_FACTOR")
    token_ttl_seconds: int | None = Field(60 * 60 * 24 * 7, alias="TOKEN_TTL_SECONDS")
    max_concurrent_hashes: int | None = Field(None, ge=1, alias="MAX_CONCURRENT_HASHES")
    password_min_length: int = Field(3, ge=1, alias="PASSWORD_MIN_LENGTH")

    model_config = _settings_config()

    @field_validator("token_ttl_seconds", mode="before")
    @classmethod
    def _parse_ttl(cls, value: str | int | None) -> int | None:
        if isinstance(value, str):
            value = value.strip()
            if value.lower() in ("", "0", "none", "off"):
                return None
            return int(value)
        if not value:
            return None
        return value

    @field_validator("token_ttl_seconds", mode="after")
    @classmethod
    def _positive_ttl(cls, value: int | None) -> int | None:
        if value is not None and value < 0:
            raise ValueError("token_ttl_seconds must be positive")
        return value

    @model_validator(mode="after")
    def _validate_cost_factor(self) -> "AuthConfig":
        if self.hash_method == "scrypt" and not 7 <= self.hash_cost_factor <= 20:
            raise ValueError("scrypt cost factor is log2(N) and must be between 7 and 20")
        return self


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)

    model_config = _settings_config()

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.auth.signing_secret.get_secret_value() in _INSECURE_SECRETS:
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure SIGNING_SECRET detected in production!\n"
                "   SIGNING_SECRET must be a strong random value in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if self.auth.token_ttl_seconds is None:
            print(
                "\n⚠️  PRODUCTION SECURITY WARNING: session tokens never expire "
                "(TOKEN_TTL_SECONDS is disabled).\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "AuthConfig", "DatabaseConfig", "load_config"]
