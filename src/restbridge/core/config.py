"""
Configuration management.

Loads settings once from environment variables and the .env file.
Variable names are fixed (REST_*, AUTH_*, HEADER_*), no common prefix.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import Field, ValidationError, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from restbridge.core.errors import ConfigurationError
from restbridge.core.logging import get_logger
from restbridge.core.types import header_problem

logger = get_logger("core.config")

DEFAULT_RESPONSE_SIZE_LIMIT = 10000
DEFAULT_TIMEOUT_MS = 30000

CUSTOM_HEADER_PREFIX = re.compile(r"^header_", re.IGNORECASE)
_TRAILING_SLASHES = re.compile(r"/+$")


def normalize_base_url(url: str) -> str:
    """Remove all trailing slashes from a base URL."""
    return _TRAILING_SLASHES.sub("", url)


def get_custom_headers(environ: Mapping[str, str | None]) -> dict[str, str]:
    """
    Collect custom headers from HEADER_* entries.

    Matching is case-insensitive and the prefix is stripped:
    HEADER_X_Custom=1 and header_Accept=json give {"X_Custom": "1", "Accept": "json"}.
    """
    headers: dict[str, str] = {}
    for key, value in environ.items():
        if value is None or not CUSTOM_HEADER_PREFIX.match(key):
            continue
        name = CUSTOM_HEADER_PREFIX.sub("", key, count=1)
        if not name:
            logger.warning(f"Ignoring {key}: empty header name after prefix")
            continue
        headers[name] = value
    return headers


class Config(BaseSettings):
    """Immutable process configuration, built once at startup."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # Target API
    base_url: str = Field(validation_alias="REST_BASE_URL", description="Base URL for all requests")
    response_size_limit: int = Field(
        default=DEFAULT_RESPONSE_SIZE_LIMIT,
        gt=0,
        validation_alias="REST_RESPONSE_SIZE_LIMIT",
        description="Maximum response body size in bytes",
    )
    timeout: int = Field(
        default=DEFAULT_TIMEOUT_MS,
        gt=0,
        validation_alias="REST_TIMEOUT",
        description="Request timeout in milliseconds",
    )
    enable_ssl_verify: bool = Field(
        default=True,
        validation_alias="REST_ENABLE_SSL_VERIFY",
        description="Verify TLS certificates (only 'false' disables)",
    )

    # Authentication
    basic_username: str | None = Field(default=None, validation_alias="AUTH_BASIC_USERNAME")
    basic_password: str | None = Field(default=None, validation_alias="AUTH_BASIC_PASSWORD")
    bearer_token: str | None = Field(default=None, validation_alias="AUTH_BEARER")
    api_key_header_name: str | None = Field(default=None, validation_alias="AUTH_APIKEY_HEADER_NAME")
    api_key_value: str | None = Field(default=None, validation_alias="AUTH_APIKEY_VALUE")

    # HEADER_* snapshot, filled by load_config()
    custom_headers: dict[str, str] = Field(default_factory=dict)

    @field_validator("base_url")
    @classmethod
    def _normalize_base_url(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("REST_BASE_URL environment variable is required")
        return normalize_base_url(value.strip())

    @field_validator("response_size_limit", "timeout", mode="before")
    @classmethod
    def _blank_is_default(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, str) and not value.strip():
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("bearer_token")
    @classmethod
    def _check_bearer_token(cls, value: str | None) -> str | None:
        if value and header_problem("Authorization", f"Bearer {value}"):
            raise ValueError("AUTH_BEARER must be printable ASCII without line breaks or surrounding whitespace")
        return value

    @field_validator("api_key_header_name")
    @classmethod
    def _check_api_key_header_name(cls, value: str | None) -> str | None:
        if value and header_problem(value, ""):
            raise ValueError(f"AUTH_APIKEY_HEADER_NAME is not a valid header name: {value!r}")
        return value

    @field_validator("api_key_value")
    @classmethod
    def _check_api_key_value(cls, value: str | None) -> str | None:
        if value and header_problem("X-API-Key", value):
            raise ValueError("AUTH_APIKEY_VALUE must be printable ASCII without line breaks or surrounding whitespace")
        return value

    @field_validator("custom_headers")
    @classmethod
    def _check_custom_headers(cls, value: dict[str, str]) -> dict[str, str]:
        for name, header_value in value.items():
            problem = header_problem(name, header_value)
            if problem:
                raise ValueError(f"HEADER_{name}: {problem}")
        return value

    @field_validator("enable_ssl_verify", mode="before")
    @classmethod
    def _parse_ssl_verify(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value != "false"
        return value

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000


def _describe_errors(error: ValidationError) -> str:
    env_names = {
        name: field.validation_alias
        for name, field in Config.model_fields.items()
        if isinstance(field.validation_alias, str)
    }
    parts = []
    for err in error.errors():
        name = ".".join(str(p) for p in err["loc"]) or "config"
        name = env_names.get(name, name)
        if err["type"] == "missing" and name == "REST_BASE_URL":
            parts.append("REST_BASE_URL environment variable is required")
        elif err["type"] == "value_error":
            parts.append(str(err["ctx"]["error"]))
        elif err["type"] in ("greater_than", "int_parsing", "int_from_float", "int_type"):
            parts.append(f"{name} must be a positive number")
        else:
            parts.append(f"{name}: {err['msg']}")
    return "; ".join(parts)


def load_config(env_file: Path | str | None = ".env") -> Config:
    """
    Build the configuration from the process environment.

    This is the only function that reads process state.

    Raises:
        ConfigurationError: if a required variable is missing or a value is invalid
    """
    environ: dict[str, str | None] = {}
    if env_file is not None and Path(env_file).is_file():
        environ.update(dotenv_values(env_file))
    environ.update(os.environ)

    try:
        config = Config(
            _env_file=env_file,  # type: ignore[call-arg]
            custom_headers=get_custom_headers(environ),
        )
    except ValidationError as e:
        raise ConfigurationError(_describe_errors(e)) from e

    logger.debug(
        f"Loaded config: base_url={config.base_url}, "
        f"size_limit={config.response_size_limit}, timeout={config.timeout}ms, "
        f"ssl_verify={config.enable_ssl_verify}, custom_headers={sorted(config.custom_headers)}"
    )
    return config


def has_basic_auth(config: Config) -> bool:
    """Basic auth needs both username and password."""
    return bool(config.basic_username and config.basic_password)


def has_bearer_auth(config: Config) -> bool:
    return bool(config.bearer_token)


def has_api_key_auth(config: Config) -> bool:
    """API key auth needs both header name and value."""
    return bool(config.api_key_header_name and config.api_key_value)
