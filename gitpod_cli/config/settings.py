"""
Process-level settings using Pydantic for type-safe configuration.

These settings control where the CLI keeps its config file, which Gitpod
installation it talks to by default, and how long remote calls may take.
Values come from ``GITPOD_*`` environment variables; command-line options
override them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitpod_cli.exceptions import ConfigurationError

DEFAULT_HOST = "gitpod.io"
DEFAULT_CONFIG_PATH = Path.home() / ".gitpod" / "config.yaml"


class CLISettings(BaseSettings):
    """Settings for a single CLI invocation.

    Environment variables:
        GITPOD_CONFIG_PATH: config file location
        GITPOD_HOST: host used when the config file has no ``host`` entry
        GITPOD_AUTH_TIMEOUT: seconds allowed for auth verification calls
        GITPOD_LIST_TIMEOUT: seconds allowed for listing workspaces
        GITPOD_LOG_LEVEL: minimum log level written to stderr
    """

    model_config = SettingsConfigDict(
        env_prefix="GITPOD_",
        case_sensitive=False,
    )

    config_path: Path = Field(default=DEFAULT_CONFIG_PATH, description="Path to the YAML config file")
    host: str = Field(default=DEFAULT_HOST, description="Default Gitpod host")
    auth_timeout: float = Field(default=10.0, ge=5.0, le=10.0, description="Timeout for auth calls (seconds)")
    list_timeout: float = Field(default=5.0, ge=5.0, le=10.0, description="Timeout for list calls (seconds)")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Logging level"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        """Accept log levels in any case."""
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("host")
    @classmethod
    def validate_host(cls, value: str) -> str:
        """Reject an empty host."""
        host = normalize_host(value)
        if not host:
            raise ValueError("host must not be empty")
        return host

    @classmethod
    def load(cls, **overrides: Any) -> CLISettings:
        """Build settings from the environment plus explicit overrides.

        ``None`` overrides are ignored so unset CLI options fall through to
        the environment and defaults.

        Raises:
            ConfigurationError: If any value fails validation
        """
        values = {key: value for key, value in overrides.items() if value is not None}
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e


def normalize_host(host: str) -> str:
    """Strip scheme, surrounding whitespace and trailing slashes from a host.

    Example:
        >>> normalize_host("https://gitpod.example.com/")
        'gitpod.example.com'
    """
    host = host.strip()
    for scheme in ("https://", "http://"):
        if host.startswith(scheme):
            host = host[len(scheme) :]
            break
    return host.rstrip("/")
