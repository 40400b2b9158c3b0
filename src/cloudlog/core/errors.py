"""
Error hierarchy for cloudlog.

Every error raised across the public surface derives from ``CloudLogError``
and carries an ``ErrorCategory`` so callers can route failures without
string matching. Errors coming from boto3/botocore are translated at the
boundary and chained with ``raise ... from exc``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable


class ErrorCategory(str, Enum):
    """Coarse classification used by diagnostics and callers."""

    CONFIG = "config"
    CONNECTION = "connection"
    DELIVERY = "delivery"
    LIFECYCLE = "lifecycle"
    SECRETS = "secrets"
    ENVIRONMENT = "environment"


class CloudLogError(Exception):
    """Base error with a category and optional structured context."""

    category: ErrorCategory = ErrorCategory.LIFECYCLE

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        **context: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        if category is not None:
            self.category = category
        self.context: dict[str, Any] = dict(context)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in sorted(self.context.items()))
        return f"{self.message} ({details})"


class ConfigurationError(CloudLogError):
    """Invalid logger or secrets configuration."""

    category = ErrorCategory.CONFIG


class SinkConnectionError(CloudLogError):
    """A sink could not establish its session with the remote service."""

    category = ErrorCategory.CONNECTION


class DeliveryError(CloudLogError):
    """A single record failed to reach its destination.

    Never raised to logging callers; built by the delivery loop so the
    failure can be reported with consistent fields.
    """

    category = ErrorCategory.DELIVERY


class LoggerCloseError(CloudLogError):
    """One or more loggers failed to close."""

    category = ErrorCategory.LIFECYCLE

    def __init__(self, errors: Iterable[BaseException]) -> None:
        self.errors: list[BaseException] = list(errors)
        summary = "; ".join(f"{type(e).__name__}: {e}" for e in self.errors)
        super().__init__(f"error closing loggers: [{summary}]")


class SecretsError(CloudLogError):
    """Base class for secrets store failures."""

    category = ErrorCategory.SECRETS


class SecretNotFoundError(SecretsError):
    """The requested secret does not exist."""


class SecretAccessDeniedError(SecretsError):
    """The ambient credentials may not read the requested secret."""


class SecretsTransientError(SecretsError):
    """Throttling, network or service-side failure; the call may succeed later."""


class EnvironmentUpdateError(CloudLogError):
    """Updating a function's environment configuration failed."""

    category = ErrorCategory.ENVIRONMENT


__all__ = [
    "CloudLogError",
    "ConfigurationError",
    "DeliveryError",
    "EnvironmentUpdateError",
    "ErrorCategory",
    "LoggerCloseError",
    "SecretAccessDeniedError",
    "SecretNotFoundError",
    "SecretsError",
    "SecretsTransientError",
    "SinkConnectionError",
]
