"""
CloudWatch Logs sink.

Each sink owns a bounded queue and exactly one background task that
delivers records one ``put_log_events`` call at a time. Emitting only
enqueues, so callers never wait on network latency; they suspend only
while the queue is full. ``close()`` waits for the queue to drain.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core import diagnostics
from ..core.errors import DeliveryError, SinkConnectionError
from ..core.events import LogRecord, Severity, format_message
from ..core.settings import DEFAULT_QUEUE_CAPACITY, default_region
from ..metrics.metrics import MetricsCollector
from .utils import SeverityMethodsMixin, parse_sink_config

__all__ = ["CloudWatchSink", "CloudWatchSinkConfig"]

# Marks the end of the stream for the delivery loop
_CLOSE = object()


class CloudWatchSinkConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    log_group_name: str
    log_stream_name: str
    region: str = Field(default_factory=default_region)
    queue_capacity: int = Field(default=DEFAULT_QUEUE_CAPACITY, ge=1)
    include_level: bool = False
    create_log_group: bool = False
    create_log_stream: bool = False

    @field_validator("log_group_name", "log_stream_name")
    @classmethod
    def _ensure_non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("log group and stream names must not be empty")
        return value


class CloudWatchSink(SeverityMethodsMixin):
    """Remote sink appending single events to one CloudWatch log stream."""

    name = "cloudwatch"

    def __init__(
        self,
        config: CloudWatchSinkConfig | dict[str, Any] | None = None,
        *,
        client: Any = None,
        metrics: MetricsCollector | None = None,
        **kwargs: Any,
    ) -> None:
        self._config = parse_sink_config(CloudWatchSinkConfig, config, **kwargs)
        self._client = client
        self._metrics = metrics
        self._queue: asyncio.Queue[Any] | None = None
        self._worker: asyncio.Task[None] | None = None
        self._drained: asyncio.Event | None = None
        self._closed = False
        self._last_timestamp = 0

    @property
    def log_group_name(self) -> str:
        return self._config.log_group_name

    @property
    def log_stream_name(self) -> str:
        return self._config.log_stream_name

    @property
    def closed(self) -> bool:
        return self._closed

    async def start(self) -> None:
        if self._closed:
            raise RuntimeError("CloudWatchSink is closed")
        if self._worker is not None:
            return
        if self._client is None:
            try:
                self._client = await asyncio.to_thread(
                    boto3.client,
                    "logs",
                    region_name=self._config.region,
                )
            except (BotoCoreError, ClientError) as exc:
                raise SinkConnectionError(
                    "failed to create CloudWatch Logs client",
                    region=self._config.region,
                    error=str(exc),
                ) from exc

        if self._config.create_log_group:
            await self._ensure(
                "create_log_group",
                logGroupName=self._config.log_group_name,
            )
        if self._config.create_log_stream:
            await self._ensure(
                "create_log_stream",
                logGroupName=self._config.log_group_name,
                logStreamName=self._config.log_stream_name,
            )

        self._queue = asyncio.Queue(maxsize=self._config.queue_capacity)
        self._drained = asyncio.Event()
        self._worker = asyncio.create_task(
            self._deliver_loop(),
            name=f"cloudwatch:{self._config.log_group_name}/{self._config.log_stream_name}",
        )

    async def close(self) -> None:
        if self._queue is None or self._drained is None or self._worker is None:
            self._closed = True
            return
        if not self._closed:
            self._closed = True
            # A finished delivery task can no longer take the close marker
            if not self._worker.done():
                await self._queue.put(_CLOSE)
        if self._worker.done():
            self._drained.set()
        # Every caller, not only the first, returns after the drain
        await self._drained.wait()

    async def health_check(self) -> bool:
        if self._client is None:
            return False
        try:
            await asyncio.to_thread(
                self._client.describe_log_streams,
                logGroupName=self._config.log_group_name,
                logStreamNamePrefix=self._config.log_stream_name,
                limit=1,
            )
            return True
        except Exception:
            return False

    async def _emit(self, severity: Severity, msg: str, args: tuple[Any, ...]) -> None:
        if self._closed:
            raise RuntimeError("CloudWatchSink is closed")
        if self._queue is None or self._worker is None:
            raise RuntimeError("CloudWatchSink is not started")
        if self._worker.done():
            raise RuntimeError("CloudWatchSink delivery task is not running")
        message = format_message(msg, args)
        if self._config.include_level:
            message = f"[{severity.label}] {message}"
        record = LogRecord(
            log_group_name=self._config.log_group_name,
            log_stream_name=self._config.log_stream_name,
            message=message,
            severity=severity,
        )
        await self._queue.put(record)

    async def _ensure(self, operation: str, **params: str) -> None:
        try:
            await asyncio.to_thread(getattr(self._client, operation), **params)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code == "ResourceAlreadyExistsException":
                return
            raise SinkConnectionError(
                f"{operation} failed", code=code, **params
            ) from exc
        except BotoCoreError as exc:
            raise SinkConnectionError(
                f"{operation} failed", error=str(exc), **params
            ) from exc

    async def _deliver_loop(self) -> None:
        assert self._queue is not None and self._drained is not None
        try:
            while True:
                record = await self._queue.get()
                if record is _CLOSE:
                    return
                await self._deliver(record)
        finally:
            self._discard_pending()
            self._drained.set()

    def _discard_pending(self) -> None:
        # Frees emitters blocked on a full queue once nothing consumes it
        assert self._queue is not None
        dropped = 0
        while not self._queue.empty():
            if self._queue.get_nowait() is not _CLOSE:
                dropped += 1
        if dropped:
            diagnostics.warn(
                "cloudwatch-sink",
                "delivery task stopped with records pending",
                log_group=self._config.log_group_name,
                log_stream=self._config.log_stream_name,
                dropped=dropped,
            )

    def _next_timestamp(self) -> int:
        # Clamped so wall-clock steps backwards never reorder a stream
        now = time.time_ns() // 1_000_000
        self._last_timestamp = max(now, self._last_timestamp)
        return self._last_timestamp

    async def _deliver(self, record: LogRecord) -> None:
        try:
            await asyncio.to_thread(
                self._client.put_log_events,
                logGroupName=record.log_group_name,
                logStreamName=record.log_stream_name,
                logEvents=[
                    {"timestamp": self._next_timestamp(), "message": record.message}
                ],
            )
        except Exception as exc:
            failure = DeliveryError(
                "failed to put CloudWatch log event",
                log_group=record.log_group_name,
                log_stream=record.log_stream_name,
                error=str(exc),
            )
            diagnostics.warn("cloudwatch-sink", failure.message, **failure.context)
            if self._metrics is not None:
                await self._metrics.record_delivery_failure(sink=self.name)
            return
        if self._metrics is not None:
            await self._metrics.record_delivered(sink=self.name)
