"""
Async-first delivery metrics for cloudlog sinks.

Implements a minimal set of Prometheus counters for record delivery.

Design goals:
- Zero global state; each collector owns an isolated registry
- Safe no-op exporting when metrics are disabled, while in-memory
  counters are always kept for quick assertions in tests
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from prometheus_client import CollectorRegistry, Counter


@dataclass
class DeliveryMetrics:
    """Captured runtime counters."""

    records_delivered: int = 0
    delivery_failures: int = 0


class MetricsCollector:
    """Per-logger async metrics collector."""

    def __init__(self, *, enabled: bool = False) -> None:
        self._enabled = bool(enabled)
        self._lock = asyncio.Lock()
        self._state = DeliveryMetrics()

        self._c_delivered: Any | None = None
        self._c_failures: Any | None = None
        self._registry: CollectorRegistry | None = None

        if self._enabled:
            self._registry = CollectorRegistry()
            self._c_delivered = Counter(
                "cloudlog_records_delivered_total",
                "Total number of log records delivered by a sink",
                ["sink"],
                registry=self._registry,
            )
            self._c_failures = Counter(
                "cloudlog_delivery_failures_total",
                "Total number of log records a sink failed to deliver",
                ["sink"],
                registry=self._registry,
            )

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def registry(self) -> CollectorRegistry | None:
        """Expose the isolated Prometheus registry when enabled."""
        return self._registry

    async def record_delivered(self, *, sink: str | None = None) -> None:
        async with self._lock:
            self._state.records_delivered += 1
        if self._c_delivered is not None:
            self._c_delivered.labels(sink=sink or "unknown").inc()

    async def record_delivery_failure(self, *, sink: str | None = None) -> None:
        async with self._lock:
            self._state.delivery_failures += 1
        if self._c_failures is not None:
            self._c_failures.labels(sink=sink or "unknown").inc()

    async def snapshot(self) -> DeliveryMetrics:
        async with self._lock:
            return DeliveryMetrics(
                records_delivered=self._state.records_delivered,
                delivery_failures=self._state.delivery_failures,
            )
