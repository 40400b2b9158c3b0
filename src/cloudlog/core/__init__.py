"""
Core building blocks: records, settings, errors, diagnostics and the facade.
"""

from .errors import (
    CloudLogError,
    ConfigurationError,
    DeliveryError,
    EnvironmentUpdateError,
    ErrorCategory,
    LoggerCloseError,
    SecretAccessDeniedError,
    SecretNotFoundError,
    SecretsError,
    SecretsTransientError,
    SinkConnectionError,
)
from .events import LogRecord, Severity, format_message
from .logger import LoggerFacade, build_backend, create_logger
from .settings import LoggerConfig, SecretsSettings, Settings, load_settings

__all__ = [
    "CloudLogError",
    "ConfigurationError",
    "DeliveryError",
    "EnvironmentUpdateError",
    "ErrorCategory",
    "LogRecord",
    "LoggerCloseError",
    "LoggerConfig",
    "LoggerFacade",
    "SecretAccessDeniedError",
    "SecretNotFoundError",
    "SecretsError",
    "SecretsSettings",
    "SecretsTransientError",
    "Settings",
    "Severity",
    "SinkConnectionError",
    "build_backend",
    "create_logger",
    "format_message",
    "load_settings",
]
