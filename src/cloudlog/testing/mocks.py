"""
Test doubles for cloudlog loggers and the boto3 clients it talks to.

The stub clients implement only the boto3 operations cloudlog calls and
raise real ``botocore.exceptions.ClientError`` instances for failures.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from botocore.exceptions import ClientError

from ..core.events import Severity, format_message
from ..sinks.utils import SeverityMethodsMixin


def client_error(code: str, operation: str, message: str = "") -> ClientError:
    """Build a ``ClientError`` the way botocore reports service errors."""
    return ClientError(
        {"Error": {"Code": code, "Message": message or code}},
        operation,
    )


@dataclass
class MockLoggerConfig:
    name: str = "mock"
    close_error: Exception | None = None
    emit_error: Exception | None = None


class MockLogger(SeverityMethodsMixin):
    """Logger that records every call for assertions.

    ``journal`` is an optional shared list; each mock appends
    ``(name, method)`` to it so tests can check ordering across mocks.
    """

    def __init__(
        self,
        config: MockLoggerConfig | None = None,
        *,
        journal: list[tuple[str, str]] | None = None,
        **kwargs: Any,
    ) -> None:
        self.config = config or MockLoggerConfig(**kwargs)
        self.name = self.config.name
        self.records: list[tuple[Severity, str]] = []
        self.journal = journal if journal is not None else []
        self.start_calls = 0
        self.close_calls = 0

    async def start(self) -> None:
        self.start_calls += 1
        self.journal.append((self.name, "start"))

    async def _emit(self, severity: Severity, msg: str, args: tuple[Any, ...]) -> None:
        self.journal.append((self.name, severity.value))
        if self.config.emit_error is not None:
            raise self.config.emit_error
        self.records.append((severity, format_message(msg, args)))

    async def close(self) -> None:
        self.close_calls += 1
        self.journal.append((self.name, "close"))
        if self.config.close_error is not None:
            raise self.config.close_error

    @property
    def messages(self) -> list[str]:
        return [message for _, message in self.records]


@dataclass
class StubLogsClient:
    """Stand-in for ``boto3.client("logs")``.

    ``failures`` is consumed one entry per ``put_log_events`` call: an
    exception entry makes that call raise, ``None`` lets it succeed. When
    ``gate`` is given every call blocks until it is set; ``entered`` is set
    as soon as the first call starts.
    """

    failures: list[Exception | None] = field(default_factory=list)
    gate: threading.Event | None = None
    create_errors: dict[str, Exception] = field(default_factory=dict)
    calls: list[dict[str, Any]] = field(default_factory=list)
    created: list[tuple[str, dict[str, Any]]] = field(default_factory=list)
    entered: threading.Event = field(default_factory=threading.Event)
    attempts: int = 0

    def put_log_events(self, **kwargs: Any) -> dict[str, Any]:
        self.attempts += 1
        self.entered.set()
        if self.gate is not None:
            self.gate.wait(timeout=5.0)
        outcome = self.failures.pop(0) if self.failures else None
        if outcome is not None:
            raise outcome
        self.calls.append(kwargs)
        return {"nextSequenceToken": str(len(self.calls))}

    def create_log_group(self, **kwargs: Any) -> dict[str, Any]:
        return self._create("create_log_group", kwargs)

    def create_log_stream(self, **kwargs: Any) -> dict[str, Any]:
        return self._create("create_log_stream", kwargs)

    def describe_log_streams(self, **kwargs: Any) -> dict[str, Any]:
        if "describe_log_streams" in self.create_errors:
            raise self.create_errors["describe_log_streams"]
        return {"logStreams": [{"logStreamName": kwargs.get("logStreamNamePrefix")}]}

    def _create(self, operation: str, params: dict[str, Any]) -> dict[str, Any]:
        if operation in self.create_errors:
            raise self.create_errors[operation]
        self.created.append((operation, params))
        return {}

    @property
    def messages(self) -> list[str]:
        return [call["logEvents"][0]["message"] for call in self.calls]

    @property
    def timestamps(self) -> list[int]:
        return [call["logEvents"][0]["timestamp"] for call in self.calls]


@dataclass
class StubSecretsClient:
    """Stand-in for ``boto3.client("secretsmanager")``.

    Values may be ``str`` (SecretString) or ``bytes`` (SecretBinary).
    ``errors`` maps a secret name to the exception ``get_secret_value``
    raises for it. ``page_size`` controls ``list_secrets`` pagination.
    """

    secrets: dict[str, str | bytes] = field(default_factory=dict)
    errors: dict[str, Exception] = field(default_factory=dict)
    list_error: Exception | None = None
    page_size: int = 100
    get_calls: list[str] = field(default_factory=list)
    list_calls: int = 0

    def get_secret_value(self, *, SecretId: str) -> dict[str, Any]:  # noqa: N803
        self.get_calls.append(SecretId)
        if SecretId in self.errors:
            raise self.errors[SecretId]
        if SecretId not in self.secrets:
            raise client_error("ResourceNotFoundException", "GetSecretValue")
        value = self.secrets[SecretId]
        if isinstance(value, bytes):
            return {"Name": SecretId, "SecretBinary": value}
        return {"Name": SecretId, "SecretString": value}

    def list_secrets(self, **kwargs: Any) -> dict[str, Any]:
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        names = sorted(self.secrets)
        start = int(kwargs.get("NextToken", 0))
        page = names[start : start + self.page_size]
        result: dict[str, Any] = {"SecretList": [{"Name": n} for n in page]}
        if start + self.page_size < len(names):
            result["NextToken"] = str(start + self.page_size)
        return result


@dataclass
class StubLambdaClient:
    """Stand-in for ``boto3.client("lambda")``."""

    variables: dict[str, dict[str, str]] = field(default_factory=dict)
    get_error: Exception | None = None
    update_error: Exception | None = None
    updates: list[dict[str, Any]] = field(default_factory=list)

    def get_function_configuration(self, *, FunctionName: str) -> dict[str, Any]:  # noqa: N803
        if self.get_error is not None:
            raise self.get_error
        if FunctionName not in self.variables:
            raise client_error("ResourceNotFoundException", "GetFunctionConfiguration")
        return {
            "FunctionName": FunctionName,
            "Environment": {"Variables": dict(self.variables[FunctionName])},
        }

    def update_function_configuration(self, **kwargs: Any) -> dict[str, Any]:
        if self.update_error is not None:
            raise self.update_error
        self.updates.append(kwargs)
        name = kwargs["FunctionName"]
        self.variables[name] = dict(kwargs["Environment"]["Variables"])
        return {"FunctionName": name, "Environment": kwargs["Environment"]}
