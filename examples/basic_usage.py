"""
Basic usage example for cloudlog.

Writes to local rotating files by default. Set ``CLOUDLOG_EXAMPLE_REMOTE=1``
(with AWS credentials and an existing log group/stream) to send the same
lines to CloudWatch Logs as well.
"""

import asyncio
import os
from pathlib import Path

from cloudlog import (
    CloudWatchSink,
    CompositeLogger,
    LoggerConfig,
    LoggerFacade,
    RotatingFileSink,
    create_logger,
)


async def file_only() -> None:
    """Single backend chosen from configuration."""
    logger = await create_logger(
        LoggerConfig(
            use_file_sink=True,
            log_directory=Path("logs"),
            log_file_prefix="example",
            file_mode="text",
        )
    )
    async with logger:
        await logger.debug("Debug message")
        await logger.info("Service started on port %d", 8080)
        await logger.warn("Cache miss ratio at %.1f%%", 37.5)
        await logger.error("Upstream %s unavailable", "billing")


async def fan_out() -> None:
    """Same lines to CloudWatch and to local files."""
    remote = CloudWatchSink(
        log_group_name=os.getenv("EXAMPLE_LOG_GROUP", "/cloudlog/example"),
        log_stream_name=os.getenv("EXAMPLE_LOG_STREAM", "local"),
        create_log_stream=True,
    )
    local = RotatingFileSink(directory=Path("logs"), filename_prefix="fanout")

    async with LoggerFacade(CompositeLogger(remote, local)) as logger:
        for i in range(5):
            await logger.info("request %d handled", i)


async def main() -> None:
    await file_only()
    if os.getenv("CLOUDLOG_EXAMPLE_REMOTE"):
        await fan_out()


if __name__ == "__main__":
    asyncio.run(main())
