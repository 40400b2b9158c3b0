"""
Pytest fixtures for cloudlog tests.

Register with ``pytest_plugins = ("cloudlog.testing.fixtures",)``.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from ..core.settings import LoggerConfig
from ..sinks.cloudwatch import CloudWatchSink
from .mocks import MockLogger, StubLambdaClient, StubLogsClient, StubSecretsClient


@pytest.fixture
def logs_client() -> StubLogsClient:
    return StubLogsClient()


@pytest.fixture
def secrets_client() -> StubSecretsClient:
    return StubSecretsClient()


@pytest.fixture
def lambda_client() -> StubLambdaClient:
    return StubLambdaClient()


@pytest.fixture
def mock_logger() -> MockLogger:
    return MockLogger()


@pytest.fixture
async def cloudwatch_sink(
    logs_client: StubLogsClient,
) -> AsyncGenerator[CloudWatchSink, None]:
    """A started sink for group ``g`` / stream ``s`` over ``logs_client``."""
    sink = CloudWatchSink(log_group_name="g", log_stream_name="s", client=logs_client)
    await sink.start()
    yield sink
    await sink.close()


@pytest.fixture
def file_logger_config(tmp_path: Path) -> LoggerConfig:
    return LoggerConfig(
        use_file_sink=True,
        log_directory=tmp_path,
        log_file_prefix="test",
    )
