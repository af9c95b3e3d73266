"""
Environment-driven settings and a default structlog setup.

logframe only configures the engine when the host application has not
configured structlog itself.

Environment:
    LOGFRAME_FACTORY: Logger factory name (default: "structlog")
    LOGFRAME_LEVEL: Root stdlib level, e.g. "debug" or "warn" (default: "info")
    LOGFRAME_RENDERER: "console" or "json" (default: "console")
    LOGFRAME_CALLSITE: Add module/func_name/lineno to events (default: true)
    LOGFRAME_CACHE_LOGGERS: structlog cache_logger_on_first_use (default: true)
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

import structlog

from .errors import ConfigurationError
from .levels import Level
from .processors import ReportingCallsiteAdder

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

RENDERERS = ("console", "json")

# stdlib level per facade level name; TRACE has no stdlib counterpart
_STDLIB_LEVELS = {
    "TRACE": logging.DEBUG,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "OFF": logging.CRITICAL + 10,
}


def env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Environment variable {name!r} must be a boolean, got {raw!r}")


@dataclass
class LogframeSettings:
    factory: str = "structlog"
    level: str = "info"
    renderer: str = "console"
    callsite: bool = True
    cache_loggers: bool = True

    def __post_init__(self) -> None:
        if self.renderer not in RENDERERS:
            raise ConfigurationError(
                f"Unknown renderer {self.renderer!r}; expected one of {', '.join(RENDERERS)}"
            )
        # Fail early on an unknown level name
        self.stdlib_level()

    @classmethod
    def from_env(cls) -> "LogframeSettings":
        return cls(
            factory=os.getenv("LOGFRAME_FACTORY", "structlog").strip() or "structlog",
            level=os.getenv("LOGFRAME_LEVEL", "info").strip() or "info",
            renderer=os.getenv("LOGFRAME_RENDERER", "console").strip().lower() or "console",
            callsite=env_bool("LOGFRAME_CALLSITE", True),
            cache_loggers=env_bool("LOGFRAME_CACHE_LOGGERS", True),
        )

    def stdlib_level(self) -> int:
        return _STDLIB_LEVELS[Level.parse(self.level).name]


def build_processors(settings: LogframeSettings) -> List[structlog.typing.Processor]:
    processors: List[structlog.typing.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        ReportingCallsiteAdder(enabled=settings.callsite),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.renderer == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.UnicodeDecoder())
        processors.append(structlog.processors.JSONRenderer())
    else:
        # ConsoleRenderer formats exceptions itself
        processors.append(structlog.processors.UnicodeDecoder())
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_structlog(settings: Optional[LogframeSettings] = None) -> LogframeSettings:
    """
    Configure structlog on top of stdlib logging.

    A stdout handler is added to the root logger only if it has no handlers.

    Returns:
        The settings that were applied
    """
    settings = settings or LogframeSettings.from_env()

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(settings.stdlib_level())

    structlog.configure(
        processors=build_processors(settings),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=settings.cache_loggers,
    )
    return settings
