"""Structured logging for the batch scheduler.

Events are short strings with key=value context attached. A logger carries
bound context (e.g. the batch width of a run) and merges in whatever scope
is active on the current task. Output goes to one renderer per context:
console lines for development, JSON lines for collection, or nothing.

Example:
    >>> configure_logging("json", "DEBUG")
    >>> log = get_logger("jobs", run="r1")
    >>> with log.scope(tenant="acme"):
    ...     log.bind(batch=3).info("batch started", size=10)
    {"timestamp": "...", "level": "info", "event": "batch started", "batch": 3, "logger": "jobs", ...}
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any, Protocol, TextIO

import orjson

JsonDict = dict[str, Any]

_scope: ContextVar[JsonDict] = ContextVar("batchwise_log_scope", default={})
_renderer: ContextVar[LogRenderer | None] = ContextVar("batchwise_log_renderer", default=None)
_threshold: ContextVar[int] = ContextVar("batchwise_log_level", default=logging.INFO)


@dataclass(frozen=True, slots=True)
class LogEntry:
    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def when(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=UTC)


class LogRenderer(Protocol):
    def render(self, entry: LogEntry) -> None: ...


@dataclass(frozen=True, slots=True)
class BoundLogger:
    """Logger with bound context; bind() returns a new logger, the original is untouched."""

    context: JsonDict = field(default_factory=dict)
    threshold: int = logging.INFO

    def bind(self, **kw: Any) -> BoundLogger:
        return replace(self, context={**self.context, **kw})

    def debug(self, event: str, **kw: Any) -> None:
        self._emit(logging.DEBUG, event, kw)

    def info(self, event: str, **kw: Any) -> None:
        self._emit(logging.INFO, event, kw)

    @contextmanager
    def scope(self, **kw: Any) -> Iterator[None]:
        """Attach context to every log line emitted on this task while the block runs."""
        token = _scope.set({**_scope.get(), **kw})
        try:
            yield
        finally:
            _scope.reset(token)

    def _emit(self, level: int, event: str, kw: JsonDict) -> None:
        if level < self.threshold:
            return
        entry = LogEntry(time.time(), logging.getLevelName(level).lower(), event, {**_scope.get(), **self.context, **kw})
        _active_renderer().render(entry)


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class ConsoleRenderer:
    """One line per event: `HH:MM:SS.mmm [level] event key=value ...`, keys sorted."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = colorize only on a tty

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = self.output.isatty() if hasattr(self.output, "isatty") else False

    def render(self, entry: LogEntry) -> None:
        stamp = entry.when.strftime("%H:%M:%S.%f")[:-3]
        level = f"[{entry.level}]"
        if self.colors:
            level = f"{_LEVEL_ANSI.get(entry.level, '')}{level}\033[0m"
        pairs = " ".join(f"{k}={_show(v)}" for k, v in sorted(entry.context.items()))
        print(f"{stamp} {level} {entry.event}" + (f" {pairs}" if pairs else ""), file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines, one object per event; non-JSON values fall back to str()."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        record = {"timestamp": entry.when.isoformat(), "level": entry.level, "event": entry.event, **entry.context}
        self.output.write(orjson.dumps(record, default=str, option=orjson.OPT_APPEND_NEWLINE).decode())


class NoOpRenderer:
    def render(self, entry: LogEntry) -> None:
        pass


_LEVEL_ANSI = {"debug": "\033[2m", "info": "\033[32m"}


def _show(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


# ─────────────────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────────────────


def configure_logging(
    format: str = "console",  # noqa: A002 - matches the BATCHWISE_LOG_FORMAT setting
    level: str = "INFO",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Select the renderer and threshold for loggers created afterwards in this context.

    Raises:
        ValueError: For a format other than "console", "json" or "none"
    """
    if format == "console":
        renderer: LogRenderer = ConsoleRenderer(output or sys.stderr, colors)
    elif format == "json":
        renderer = JsonRenderer(output or sys.stdout)
    elif format == "none":
        renderer = NoOpRenderer()
    else:
        raise ValueError(f"Unknown log format {format!r}; expected 'console', 'json' or 'none'")
    _threshold.set(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
    _renderer.set(renderer)
    return renderer


def configure_from_settings(*, output: TextIO | None = None) -> LogRenderer:
    """Configure logging from BATCHWISE_LOG_* (and BATCHWISE_DEBUG) settings."""
    from batchwise.foundation.config import get_settings

    settings = get_settings()
    return configure_logging(settings.logging.format, settings.effective_log_level, output=output)


def get_logger(name: str | None = None, **context: Any) -> BoundLogger:
    """Logger using the current threshold; name is bound as 'logger'."""
    if name:
        context["logger"] = name
    return BoundLogger(context, _threshold.get())


def _active_renderer() -> LogRenderer:
    if (renderer := _renderer.get()) is None:
        _renderer.set(renderer := ConsoleRenderer())
    return renderer
