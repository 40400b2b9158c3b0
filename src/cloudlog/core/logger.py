"""
Logger facade: the single logging object application code depends on.

The backend is chosen once, from ``LoggerConfig``, when the facade is
built; afterwards every call is plain delegation.
"""

from __future__ import annotations

import types
from typing import TYPE_CHECKING, Any

from . import diagnostics
from .errors import ConfigurationError
from .settings import LoggerConfig, load_settings

if TYPE_CHECKING:
    from ..metrics.metrics import MetricsCollector
    from ..sinks import BaseLogger


def validate_backend_selection(config: LoggerConfig) -> None:
    """Raise ``ConfigurationError`` unless exactly one backend is selected."""
    if not config.use_remote_sink and not config.use_file_sink:
        raise ConfigurationError(
            "either use_remote_sink or use_file_sink must be true"
        )
    if config.use_remote_sink and config.use_file_sink:
        raise ConfigurationError(
            "only one of use_remote_sink or use_file_sink can be true"
        )


def build_backend(
    config: LoggerConfig,
    *,
    client: Any = None,
    metrics: MetricsCollector | None = None,
) -> BaseLogger:
    """Validate ``config`` and construct (but do not start) its backend.

    ``client`` is an optional pre-built CloudWatch Logs client for the
    remote backend.
    """
    validate_backend_selection(config)

    from ..sinks.cloudwatch import CloudWatchSink, CloudWatchSinkConfig
    from ..sinks.rotating_file import RotatingFileSink, RotatingFileSinkConfig

    try:
        if config.use_remote_sink:
            return CloudWatchSink(
                CloudWatchSinkConfig(
                    log_group_name=config.log_group_name,
                    log_stream_name=config.log_stream_name,
                    region=config.region,
                    queue_capacity=config.queue_capacity,
                    include_level=config.include_level,
                ),
                client=client,
                metrics=metrics,
            )
        return RotatingFileSink(
            RotatingFileSinkConfig(
                directory=config.log_directory,
                filename_prefix=config.log_file_prefix,
                mode=config.file_mode,
                max_bytes=config.max_file_size,
                max_files=config.max_files,
                compress_rotated=config.compress_rotated,
            ),
            metrics=metrics,
        )
    except ValueError as exc:
        # pydantic.ValidationError subclasses ValueError
        raise ConfigurationError("invalid backend parameters", error=str(exc)) from exc


class LoggerFacade:
    """Forward every logging call to one underlying logger.

    Build from configuration with ``await LoggerFacade.from_config(cfg)``
    (or ``create_logger``), or wrap an existing logger such as a
    ``CompositeLogger`` directly with ``LoggerFacade(logger)``.
    """

    def __init__(self, logger: BaseLogger) -> None:
        self._logger = logger

    @classmethod
    async def from_config(
        cls,
        config: LoggerConfig,
        *,
        client: Any = None,
        metrics: MetricsCollector | None = None,
    ) -> LoggerFacade:
        from ..sinks.utils import get_logger_name

        backend = build_backend(config, client=client, metrics=metrics)
        await backend.start()
        diagnostics.debug(
            "logger",
            "logger facade ready",
            backend=get_logger_name(backend),
        )
        return cls(backend)

    @property
    def backend(self) -> BaseLogger:
        return self._logger

    async def start(self) -> None:
        await self._logger.start()

    async def debug(self, msg: str, *args: Any) -> None:
        await self._logger.debug(msg, *args)

    async def info(self, msg: str, *args: Any) -> None:
        await self._logger.info(msg, *args)

    async def warn(self, msg: str, *args: Any) -> None:
        await self._logger.warn(msg, *args)

    async def error(self, msg: str, *args: Any) -> None:
        await self._logger.error(msg, *args)

    async def close(self) -> None:
        await self._logger.close()

    async def __aenter__(self) -> LoggerFacade:
        await self.start()
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc: BaseException | None,
        _tb: types.TracebackType | None,
    ) -> None:
        await self.close()


async def create_logger(
    config: LoggerConfig | None = None,
    *,
    client: Any = None,
    metrics: MetricsCollector | None = None,
) -> LoggerFacade:
    """Return a started logger facade.

    When ``config`` is omitted it is read from the environment
    (``CLOUDLOG_LOGGER__*`` variables).

    Example:
        logger = await create_logger(
            LoggerConfig(
                use_remote_sink=True,
                log_group_name="my-app",
                log_stream_name="web-1",
            )
        )
        await logger.info("user %s signed in", user_id)
        await logger.close()
    """
    if config is None:
        config = load_settings().logger
    return await LoggerFacade.from_config(config, client=client, metrics=metrics)
