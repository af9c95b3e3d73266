from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import structlog
from structlog.stdlib import PositionalArgumentsFormatter

from logframe.config import LogframeSettings, configure_structlog
from logframe.levels import Level
from logframe.logger import DEFAULT_LEVEL, REPORTER, EngineLoggerFactory
from logframe.processors import REPORTER_KEY, ReportingCallsiteAdder

from .base import EngineAdapter

# structlog's stdlib wrapper has no trace method, so TRACE shares DEBUG
LEVEL_MAP: Dict[Level, int] = {
    Level.TRACE: logging.DEBUG,
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
}

# Modules between the client's log call and the stdlib logger
RECORD_IGNORES: Tuple[str, ...] = ("structlog", __name__, REPORTER)


def _ignored(module: str) -> bool:
    return any(module == name or module.startswith(name + ".") for name in RECORD_IGNORES)


def client_stacklevel() -> int:
    """``stacklevel`` that makes stdlib records point at the first frame outside ``RECORD_IGNORES``."""
    frame = sys._getframe(1)
    level = 1
    try:
        while frame.f_back is not None and _ignored(frame.f_globals.get("__name__", "")):
            frame = frame.f_back
            level += 1
        return level
    finally:
        del frame


class LocatedLogger:
    """
    Proxy for a stdlib ``logging.Logger`` whose records carry the client's
    call site in ``pathname``, ``lineno`` and ``funcName``.

    Everything other than the emitting methods is forwarded unchanged, so
    structlog's stdlib processors (``filter_by_level``, ``add_logger_name``)
    see the wrapped logger.
    """

    __slots__ = ("_logger",)

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def __getattr__(self, name: str) -> Any:
        return getattr(self._logger, name)

    def debug(self, msg: Any, *args: Any, **kw: Any) -> None:
        self._emit(logging.DEBUG, msg, args, kw)

    def info(self, msg: Any, *args: Any, **kw: Any) -> None:
        self._emit(logging.INFO, msg, args, kw)

    def warning(self, msg: Any, *args: Any, **kw: Any) -> None:
        self._emit(logging.WARNING, msg, args, kw)

    def error(self, msg: Any, *args: Any, **kw: Any) -> None:
        self._emit(logging.ERROR, msg, args, kw)

    def exception(self, msg: Any, *args: Any, exc_info: Any = True, **kw: Any) -> None:
        self._emit(logging.ERROR, msg, args, dict(kw, exc_info=exc_info))

    def critical(self, msg: Any, *args: Any, **kw: Any) -> None:
        self._emit(logging.CRITICAL, msg, args, kw)

    warn = warning
    fatal = critical

    def log(self, level: int, msg: Any, *args: Any, **kw: Any) -> None:
        self._emit(level, msg, args, kw)

    def _emit(self, level: int, msg: Any, args: Tuple[Any, ...], kw: Dict[str, Any]) -> None:
        kw.setdefault("stacklevel", client_stacklevel())
        self._logger.log(level, msg, *args, **kw)

    def __repr__(self) -> str:
        return f"LocatedLogger({self._logger!r})"


@dataclass(frozen=True)
class StructlogChannel:
    stdlib: logging.Logger
    bound: Any


class StructlogAdapter(EngineAdapter):
    """
    Engine adapter writing through structlog's stdlib ``BoundLogger``.

    Channels are always a stdlib ``BoundLogger`` over ``logging.getLogger(name)``,
    whatever wrapper class and logger factory the host configured; only the
    configured processor chain is taken from structlog. If structlog has not
    been configured when the adapter is created, the default logframe
    configuration (``configure_structlog``) is applied.
    """

    def __init__(self, settings: Optional[LogframeSettings] = None):
        if not structlog.is_configured():
            configure_structlog(settings)

    def channel(self, name: str) -> StructlogChannel:
        stdlib_logger = logging.getLogger(name)
        bound = structlog.wrap_logger(
            LocatedLogger(stdlib_logger),
            wrapper_class=structlog.stdlib.BoundLogger,
        )
        return StructlogChannel(stdlib_logger, bound)

    def is_enabled(self, channel: StructlogChannel, level: Level) -> bool:
        return channel.stdlib.isEnabledFor(LEVEL_MAP[level])

    def write(
        self,
        channel: StructlogChannel,
        reporter: str,
        level: Level,
        message: str,
        args: Sequence[Any],
        exc_info: Optional[BaseException] = None,
    ) -> None:
        tags_reporter, formats_args = _chain_features()
        event_kw: Dict[str, Any] = {}
        if tags_reporter:
            event_kw[REPORTER_KEY] = reporter
        if exc_info is not None:
            event_kw["exc_info"] = exc_info
        if args and not formats_args:
            message, args = message % tuple(args), ()
        channel.bound.log(LEVEL_MAP[level], message, *args, **event_kw)


def _chain_features() -> Tuple[bool, bool]:
    """Whether the configured chain strips the reporter tag and formats positional args."""
    processors = structlog.get_config()["processors"]
    return (
        any(isinstance(p, ReportingCallsiteAdder) for p in processors),
        any(isinstance(p, PositionalArgumentsFormatter) for p in processors),
    )


class StructlogLoggerFactory(EngineLoggerFactory):
    def __init__(self, default_level: Level = DEFAULT_LEVEL, settings: Optional[LogframeSettings] = None):
        super().__init__(StructlogAdapter(settings), default_level)
