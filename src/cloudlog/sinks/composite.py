from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..core.errors import LoggerCloseError

if TYPE_CHECKING:
    from . import BaseLogger


class CompositeLogger:
    """Fan each call out to several loggers, in the order given.

    Members are referenced, not copied; callers may keep using them
    directly. Emit failures from a member propagate unchanged. ``close()``
    always attempts every member and raises one ``LoggerCloseError`` that
    carries every failure.
    """

    name = "composite"

    def __init__(self, *loggers: BaseLogger) -> None:
        self._loggers: tuple[BaseLogger, ...] = loggers

    @property
    def loggers(self) -> tuple[BaseLogger, ...]:
        return self._loggers

    async def start(self) -> None:
        for logger in self._loggers:
            await logger.start()

    async def debug(self, msg: str, *args: Any) -> None:
        for logger in self._loggers:
            await logger.debug(msg, *args)

    async def info(self, msg: str, *args: Any) -> None:
        for logger in self._loggers:
            await logger.info(msg, *args)

    async def warn(self, msg: str, *args: Any) -> None:
        for logger in self._loggers:
            await logger.warn(msg, *args)

    async def error(self, msg: str, *args: Any) -> None:
        for logger in self._loggers:
            await logger.error(msg, *args)

    async def close(self) -> None:
        errors: list[Exception] = []
        for logger in self._loggers:
            try:
                await logger.close()
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)
        if errors:
            raise LoggerCloseError(errors)
