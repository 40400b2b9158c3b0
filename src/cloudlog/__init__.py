"""
Public entrypoints for cloudlog.

Build a logger from configuration with ``create_logger()``, log with the
four async severity methods, and ``close()`` it at shutdown to drain
pending records:

    import asyncio
    from cloudlog import LoggerConfig, create_logger

    async def main() -> None:
        logger = await create_logger(
            LoggerConfig(use_file_sink=True, log_directory="logs")
        )
        await logger.info("service started on port %d", 8080)
        await logger.close()

    asyncio.run(main())
"""

from __future__ import annotations

from ._version import __version__
from .core.errors import (
    CloudLogError,
    ConfigurationError,
    LoggerCloseError,
    SinkConnectionError,
)
from .core.events import LogRecord, Severity
from .core.logger import LoggerFacade, create_logger
from .core.settings import LoggerConfig, Settings, load_settings
from .sinks import (
    BaseLogger,
    CloudWatchSink,
    CloudWatchSinkConfig,
    CompositeLogger,
    RotatingFileSink,
    RotatingFileSinkConfig,
)

VERSION = __version__

__all__ = [
    "BaseLogger",
    "CloudLogError",
    "CloudWatchSink",
    "CloudWatchSinkConfig",
    "CompositeLogger",
    "ConfigurationError",
    "LogRecord",
    "LoggerCloseError",
    "LoggerConfig",
    "LoggerFacade",
    "RotatingFileSink",
    "RotatingFileSinkConfig",
    "Settings",
    "Severity",
    "SinkConnectionError",
    "VERSION",
    "__version__",
    "create_logger",
    "load_settings",
]
