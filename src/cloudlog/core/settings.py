"""
Configuration models for cloudlog using Pydantic v2 Settings.

``Settings`` is the environment-backed root; ``LoggerConfig`` and
``SecretsSettings`` are namespaced groups that can also be built directly
in code. Environment variables use the ``CLOUDLOG_`` prefix and ``__`` as
the nesting delimiter, e.g. ``CLOUDLOG_LOGGER__USE_FILE_SINK=true``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (  # type: ignore[import-not-found]
    BaseSettings,
    SettingsConfigDict,
)

LATEST_CONFIG_SCHEMA_VERSION = "1.0"

DEFAULT_REGION = "us-east-1"
DEFAULT_QUEUE_CAPACITY = 100


def default_region() -> str:
    """Region from the ambient AWS environment, falling back to us-east-1."""
    return os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or DEFAULT_REGION


class LoggerConfig(BaseModel):
    """Backend selection for the logger facade.

    Exactly one of ``use_remote_sink`` / ``use_file_sink`` must be true; the
    facade enforces this before building anything, so an invalid selection
    is still a valid model here.
    """

    use_remote_sink: bool = Field(
        default=False, description="Deliver log lines to CloudWatch Logs"
    )
    use_file_sink: bool = Field(
        default=False, description="Write log lines to local rotating files"
    )

    # Remote sink
    log_group_name: str = Field(default="", description="CloudWatch log group")
    log_stream_name: str = Field(default="", description="CloudWatch log stream")
    region: str = Field(
        default_factory=default_region, description="AWS region for CloudWatch"
    )
    queue_capacity: int = Field(
        default=DEFAULT_QUEUE_CAPACITY,
        ge=1,
        description="Records buffered per remote sink before emit suspends",
    )
    include_level: bool = Field(
        default=False,
        description="Prefix remote messages with their severity label",
    )

    # File sink
    log_directory: Path = Field(
        default=Path("logs"), description="Directory for log files"
    )
    log_file_prefix: str = Field(default="app", description="Log file name prefix")
    max_file_size: int = Field(
        default=10 * 1024 * 1024,
        ge=1,
        description="Maximum bytes per log file before rotation",
    )
    file_mode: Literal["json", "text"] = Field(
        default="json", description="Line format for the file sink"
    )
    max_files: int | None = Field(
        default=None, ge=1, description="Keep at most this many log files"
    )
    compress_rotated: bool = Field(
        default=False, description="Gzip files once they are rotated out"
    )

    @field_validator("log_file_prefix")
    @classmethod
    def _ensure_prefix_non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("log_file_prefix must not be empty")
        return value


class SecretsSettings(BaseModel):
    """Secrets Manager and Lambda accessor settings."""

    region: str = Field(
        default_factory=default_region,
        description="AWS region for Secrets Manager and Lambda",
    )


class Settings(BaseSettings):
    """Top-level configuration model with versioning and grouped settings."""

    schema_version: str = Field(
        default=LATEST_CONFIG_SCHEMA_VERSION,
        description="Configuration schema version for compatibility checks",
    )

    logger: LoggerConfig = Field(
        default_factory=LoggerConfig,
        description="Logger backend selection and sink parameters",
    )
    secrets: SecretsSettings = Field(
        default_factory=SecretsSettings,
        description="Secrets Manager and Lambda accessor settings",
    )

    internal_logging_enabled: bool = Field(
        default=False, description="Emit DEBUG diagnostics for internal events"
    )

    model_config = SettingsConfigDict(
        env_prefix="CLOUDLOG_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    def to_dict(self) -> dict[str, object]:
        from typing import cast

        return cast(
            dict[str, object],
            self.model_dump(mode="json", exclude_none=True),
        )


def load_settings(**overrides: Any) -> Settings:
    """Build ``Settings`` from the environment with keyword overrides on top."""
    return Settings(**overrides)
