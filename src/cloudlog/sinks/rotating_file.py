"""
Rotating file sink.

Writes one line per record into ``{prefix}-{YYYYmmdd-HHMMSS}.jsonl`` (json
mode) or ``.log`` (text mode) under ``directory``. A new file is started
before a write that would push a non-empty file past ``max_bytes`` and
when ``interval_seconds`` elapses. Rotated files can be gzipped and are
pruned oldest-first by ``max_files`` (active file included) and
``max_total_bytes`` (rotated files only).

File I/O runs in worker threads through ``asyncio.to_thread`` and is
serialized by an ``asyncio.Lock``. Write errors are contained and
reported through diagnostics.
"""

from __future__ import annotations

import asyncio
import gzip
import json
import re
import shutil
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, BinaryIO, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..core import diagnostics
from ..core.events import Severity, format_message
from ..metrics.metrics import MetricsCollector
from .utils import SeverityMethodsMixin, parse_sink_config

__all__ = ["RotatingFileSink", "RotatingFileSinkConfig"]


class RotatingFileSinkConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    directory: Path
    filename_prefix: str = Field(default="app", min_length=1)
    mode: Literal["json", "text"] = "json"
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    interval_seconds: int | None = Field(default=None, ge=1)
    max_files: int | None = Field(default=None, ge=1)
    max_total_bytes: int | None = Field(default=None, ge=1)
    compress_rotated: bool = False


def _text_value(value: str) -> str:
    if not value or any(ch.isspace() or ch in '="' for ch in value):
        return json.dumps(value, ensure_ascii=False)
    return value


class RotatingFileSink(SeverityMethodsMixin):
    """Local file sink with size/time rotation and retention."""

    name = "rotating_file"

    def __init__(
        self,
        config: RotatingFileSinkConfig | dict[str, Any] | None = None,
        *,
        metrics: MetricsCollector | None = None,
        **kwargs: Any,
    ) -> None:
        self._config = parse_sink_config(RotatingFileSinkConfig, config, **kwargs)
        self._metrics = metrics
        self._lock = asyncio.Lock()
        self._fh: BinaryIO | None = None
        self._path: Path | None = None
        self._size = 0
        self._next_rotation: float | None = None
        # Rotated files, oldest first
        self._history: list[Path] = []
        self._started = False
        self._closed = False

    @property
    def current_path(self) -> Path | None:
        return self._path

    async def start(self) -> None:
        if self._closed:
            raise RuntimeError("RotatingFileSink is closed")
        if self._started:
            return
        async with self._lock:
            await asyncio.to_thread(self._open_initial)
        self._started = True

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        async with self._lock:
            await asyncio.to_thread(self._close_file)

    async def _emit(self, severity: Severity, msg: str, args: tuple[Any, ...]) -> None:
        if self._closed:
            raise RuntimeError("RotatingFileSink is closed")
        if not self._started:
            raise RuntimeError("RotatingFileSink is not started")
        data = self._render(severity, format_message(msg, args))
        try:
            async with self._lock:
                await asyncio.to_thread(self._write_line, data)
        except Exception as exc:
            diagnostics.warn(
                "rotating-file-sink",
                "failed to write log line",
                path=str(self._path),
                error=str(exc),
            )
            if self._metrics is not None:
                await self._metrics.record_delivery_failure(sink=self.name)
            return
        if self._metrics is not None:
            await self._metrics.record_delivered(sink=self.name)

    def _render(self, severity: Severity, message: str) -> bytes:
        fields = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": severity.label,
            "message": message,
        }
        if self._config.mode == "json":
            line = json.dumps(fields, separators=(",", ":"), ensure_ascii=False)
        else:
            line = " ".join(f"{k}={_text_value(v)}" for k, v in sorted(fields.items()))
        return (line + "\n").encode("utf-8")

    # Blocking helpers below run in worker threads

    def _open_initial(self) -> None:
        self._config.directory.mkdir(parents=True, exist_ok=True)
        self._history = self._existing_files()
        self._open_new_file()
        self._enforce_retention()

    def _existing_files(self) -> list[Path]:
        # Only names this sink would write; "app" must not claim "app-audit-*"
        pattern = re.compile(
            rf"{re.escape(self._config.filename_prefix)}"
            r"-\d{8}-\d{6}(?:-\d+)?\.(?:jsonl|log)(?:\.gz)?"
        )
        found = [
            p
            for p in self._config.directory.iterdir()
            if p.is_file() and pattern.fullmatch(p.name)
        ]
        return sorted(found, key=lambda p: p.stat().st_mtime)

    def _open_new_file(self) -> None:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
        ext = ".jsonl" if self._config.mode == "json" else ".log"
        base = f"{self._config.filename_prefix}-{stamp}"
        candidate = self._config.directory / f"{base}{ext}"
        suffix = 1
        while candidate.exists() or candidate.with_name(candidate.name + ".gz").exists():
            candidate = self._config.directory / f"{base}-{suffix}{ext}"
            suffix += 1
        self._fh = open(candidate, "ab")
        self._path = candidate
        self._size = 0
        if self._config.interval_seconds:
            self._next_rotation = time.time() + self._config.interval_seconds
        else:
            self._next_rotation = None

    def _should_rotate(self, incoming: int) -> bool:
        if self._size > 0 and self._size + incoming > self._config.max_bytes:
            return True
        return self._next_rotation is not None and time.time() >= self._next_rotation

    def _write_line(self, data: bytes) -> None:
        if self._fh is None:
            raise RuntimeError("no open log file")
        if self._should_rotate(len(data)):
            self._rotate()
        assert self._fh is not None
        self._fh.write(data)
        self._fh.flush()
        self._size += len(data)

    def _rotate(self) -> None:
        rotated = self._close_file()
        if rotated is not None:
            if self._config.compress_rotated:
                rotated = self._compress(rotated)
            self._history.append(rotated)
        self._open_new_file()
        self._enforce_retention()

    def _compress(self, path: Path) -> Path:
        target = path.with_name(path.name + ".gz")
        with open(path, "rb") as src, gzip.open(target, "wb") as dst:
            shutil.copyfileobj(src, dst)
        path.unlink()
        return target

    def _enforce_retention(self) -> None:
        if self._config.max_files is not None:
            while self._history and len(self._history) + 1 > self._config.max_files:
                self._history.pop(0).unlink(missing_ok=True)
        if self._config.max_total_bytes is not None:
            sizes = [p.stat().st_size if p.exists() else 0 for p in self._history]
            total = sum(sizes)
            while self._history and total > self._config.max_total_bytes:
                total -= sizes.pop(0)
                self._history.pop(0).unlink(missing_ok=True)

    def _close_file(self) -> Path | None:
        fh, path = self._fh, self._path
        self._fh = None
        if fh is None:
            return None
        fh.close()
        return path
