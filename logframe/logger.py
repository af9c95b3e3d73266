from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from .api import Logger, LoggerFactory
from .cache import InstanceCache
from .deferred import resolve, resolve_all
from .levels import Level
from .noop import NOOP_LOGGER

if TYPE_CHECKING:
    from .adapters.base import EngineAdapter

DEFAULT_LEVEL = Level.INFO
EMPTY_MESSAGE = ""

# Engines skip frames from this module when locating the log call site
REPORTER = __name__


class EngineLogger(Logger):
    """
    Immutable logger handle bound to one name and one level.

    Handles are only built by ``EngineLoggerFactory``, which caches them so
    that each (name, level) pair maps to a single instance. The enabled
    check is made against the engine on every call.
    """

    __slots__ = ("_name", "_level", "_channel", "_factory")

    def __init__(self, name: str, level: Level, channel: Any, factory: "EngineLoggerFactory"):
        self._name = name
        self._level = level
        self._channel = channel
        self._factory = factory

    @property
    def name(self) -> str:
        return self._name

    @property
    def level(self) -> Level:
        return self._level

    def is_enabled(self) -> bool:
        return self._factory.engine.is_enabled(self._channel, self._level)

    def at_level(self, level: Level) -> Logger:
        if level == self._level:
            return self
        if level == Level.OFF:
            return NOOP_LOGGER
        return self._factory.cache.get_or_create(self._name, level)

    def log(self, message: Any = EMPTY_MESSAGE, *args: Any, exc_info: Optional[BaseException] = None) -> None:
        if not self.is_enabled():
            return

        if isinstance(message, BaseException) and exc_info is None and not args:
            message, exc_info = EMPTY_MESSAGE, message

        self._factory.engine.write(
            self._channel,
            REPORTER,
            self._level,
            str(resolve(message)),
            resolve_all(args),
            exc_info,
        )

    def __repr__(self) -> str:
        return f"EngineLogger(name={self._name!r}, level={self._level.name})"


class EngineLoggerFactory(LoggerFactory):
    """
    Builds and caches ``EngineLogger`` handles over one engine adapter.

    Usage:
        factory = EngineLoggerFactory(StructlogAdapter())
        factory.logger("svc.orders").at_warn().log("queue is %d deep", depth)
    """

    def __init__(self, engine: "EngineAdapter", default_level: Level = DEFAULT_LEVEL):
        if default_level == Level.OFF:
            raise ValueError("default_level cannot be Level.OFF")
        self.engine = engine
        self.default_level = default_level
        self.cache: InstanceCache[EngineLogger] = InstanceCache(self._construct)

    def logger(self, name: str) -> Logger:
        return self.cache.get_or_create(name, self.default_level)

    def _construct(self, name: str, level: Level) -> EngineLogger:
        return EngineLogger(name, level, self.engine.channel(name), self)
