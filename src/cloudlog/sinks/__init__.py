from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class BaseLogger(Protocol):
    """Async logging capability shared by sinks, composites and the facade.

    ``start()`` does the construction work that needs a running event loop
    (clients, background tasks, open files). The four severity methods
    format ``msg % args`` and hand the record to the destination; they may
    suspend for backpressure but never raise on delivery problems.
    ``close()`` suspends until everything accepted so far has been handled.
    """

    async def start(self) -> None:  # Lifecycle hook
        ...

    async def debug(self, msg: str, *args: Any) -> None: ...

    async def info(self, msg: str, *args: Any) -> None: ...

    async def warn(self, msg: str, *args: Any) -> None: ...

    async def error(self, msg: str, *args: Any) -> None: ...

    async def close(self) -> None: ...


from .cloudwatch import CloudWatchSink, CloudWatchSinkConfig  # noqa: E402
from .composite import CompositeLogger  # noqa: E402
from .rotating_file import RotatingFileSink, RotatingFileSinkConfig  # noqa: E402

__all__ = [
    "BaseLogger",
    "CloudWatchSink",
    "CloudWatchSinkConfig",
    "CompositeLogger",
    "RotatingFileSink",
    "RotatingFileSinkConfig",
]
