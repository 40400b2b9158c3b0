"""
Sink helpers for config parsing, naming and the shared severity surface.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

from ..core.events import Severity

ConfigT = TypeVar("ConfigT", bound=BaseModel)


def parse_sink_config(
    model: type[ConfigT],
    config: ConfigT | dict[str, Any] | None,
    **overrides: Any,
) -> ConfigT:
    """Coerce a config object, a dict or keyword overrides into ``model``.

    Keyword overrides win over values from ``config``.
    """
    if isinstance(config, model):
        if not overrides:
            return config
        data = config.model_dump()
    elif config is None:
        data = {}
    else:
        data = dict(config)
    data.update(overrides)
    return model.model_validate(data)


def get_logger_name(logger: Any) -> str:
    """Canonical name of a logger: its ``name`` attribute or the class name."""
    name = getattr(logger, "name", None)
    if isinstance(name, str) and name.strip():
        return name.strip()
    return type(logger).__name__


class SeverityMethodsMixin:
    """Map the four severity methods onto a single ``_emit`` hook."""

    async def _emit(self, severity: Severity, msg: str, args: tuple[Any, ...]) -> None:
        raise NotImplementedError

    async def debug(self, msg: str, *args: Any) -> None:
        await self._emit(Severity.DEBUG, msg, args)

    async def info(self, msg: str, *args: Any) -> None:
        await self._emit(Severity.INFO, msg, args)

    async def warn(self, msg: str, *args: Any) -> None:
        await self._emit(Severity.WARN, msg, args)

    async def error(self, msg: str, *args: Any) -> None:
        await self._emit(Severity.ERROR, msg, args)
