"""
Log record value types.

``LogRecord`` is created once per logging call and consumed exactly once
by a sink; it is frozen so nothing downstream can mutate it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from . import diagnostics


class Severity(str, Enum):
    """The four fixed severities every logger accepts."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def label(self) -> str:
        return self.value.upper()


@dataclass(frozen=True)
class LogRecord:
    """A formatted message bound to its destination stream."""

    log_group_name: str
    log_stream_name: str
    message: str
    severity: Severity = Severity.INFO

    def to_dict(self) -> dict[str, Any]:
        return {
            "log_group_name": self.log_group_name,
            "log_stream_name": self.log_stream_name,
            "message": self.message,
            "severity": self.severity.value,
        }


def format_message(template: str, args: tuple[Any, ...]) -> str:
    """Apply printf-style ``%`` substitution of ``args`` into ``template``.

    With no args the template is returned verbatim, so a literal ``%`` in a
    plain message is safe. A mismatch between placeholders and args never
    raises: a diagnostic is emitted and the args are appended instead.
    """
    if not args:
        return template
    try:
        return template % args
    except (TypeError, ValueError, KeyError, OverflowError) as exc:
        diagnostics.warn(
            "logger",
            "message formatting error",
            template=template,
            error=str(exc),
        )
        return " ".join([template, *(str(a) for a in args)])


__all__ = ["LogRecord", "Severity", "format_message"]
