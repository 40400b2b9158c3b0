"""
Internal diagnostics for non-fatal errors.

Sinks report problems they contain (failed deliveries, formatting
errors, file write failures) here instead of raising to the logging
caller. Each diagnostic is one JSON object per line on stderr.

``warn`` always writes. ``debug`` writes only when
``internal_logging_enabled`` is set; the setting is read once and cached
in ``_internal_logging_enabled`` (tests reset it to ``None``).
"""

from __future__ import annotations

import json
import sys
import time
from typing import Any

_internal_logging_enabled: bool | None = None


def _debug_enabled() -> bool:
    global _internal_logging_enabled
    if _internal_logging_enabled is None:
        try:
            from .settings import Settings

            _internal_logging_enabled = bool(Settings().internal_logging_enabled)
        except Exception:
            _internal_logging_enabled = False
    return _internal_logging_enabled


def _write(level: str, component: str, message: str, fields: dict[str, Any]) -> None:
    payload: dict[str, Any] = {
        "ts": round(time.time(), 3),
        "level": level,
        "component": component,
        "message": message,
    }
    payload.update(fields)
    try:
        line = json.dumps(payload, separators=(",", ":"), default=str)
    except Exception:
        line = json.dumps(
            {"level": level, "component": component, "message": message}
        )
    sys.stderr.write(line + "\n")
    sys.stderr.flush()


def warn(component: str, message: str, **fields: Any) -> None:
    """Report a contained failure on stderr. Never raises."""
    try:
        _write("WARN", component, message, fields)
    except Exception:
        pass


def debug(component: str, message: str, **fields: Any) -> None:
    """Report an internal event when internal logging is enabled."""
    if not _debug_enabled():
        return
    try:
        _write("DEBUG", component, message, fields)
    except Exception:
        pass
