"""
Testing utilities for cloudlog.

This module provides mocks, stub AWS clients and validators for testing
code that logs through cloudlog or custom ``BaseLogger`` implementations.

Pytest fixtures live in ``cloudlog.testing.fixtures`` and require the
testing extra: `pip install cloudlog[testing]`

Example:
    from cloudlog.testing import MockLogger, validate_logger

    def test_my_logger():
        result = validate_logger(MyLogger())
        assert result.valid
"""

from .mocks import (
    MockLogger,
    MockLoggerConfig,
    StubLambdaClient,
    StubLogsClient,
    StubSecretsClient,
    client_error,
)
from .validators import ProtocolViolationError, ValidationResult, validate_logger

__all__ = [
    # Mocks
    "MockLogger",
    "MockLoggerConfig",
    "StubLambdaClient",
    "StubLogsClient",
    "StubSecretsClient",
    "client_error",
    # Validators
    "ProtocolViolationError",
    "ValidationResult",
    "validate_logger",
]
