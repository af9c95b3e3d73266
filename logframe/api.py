"""
Public logging facade.

Usage:
    from logframe import Logger, Deferred

    class OrderService:
        _log = Logger.instance()          # named "<module>.OrderService"

        def place(self, order):
            self._log.log("placing order %s", order.id)
            self._log.at_debug().log("payload %s", Deferred(lambda: order.dump()))

The handle returned by ``Logger.instance`` is backed by the factory chosen
through ``get_factory`` (structlog unless configured otherwise).
"""

from __future__ import annotations

import importlib
import threading
from abc import ABC, abstractmethod
from importlib import metadata
from types import ModuleType
from typing import Any, Dict, Optional, Union

from .caller import resolve_caller_name
from .config import LogframeSettings
from .errors import FactoryNotFoundError
from .levels import Level

FACTORY_ENTRY_POINT_GROUP = "logframe.factories"

BUILTIN_FACTORIES: Dict[str, str] = {
    "structlog": "logframe.adapters.structlog_adapter:StructlogLoggerFactory",
}

Subject = Union[str, type, ModuleType, None]


class Logger(ABC):
    __slots__ = ()

    @classmethod
    def instance(cls, subject: Subject = None) -> "Logger":
        """
        Acquire a logger.

        Args:
            subject: Logger name, a class (named by its qualified name) or a
                module. ``None`` names the logger after the calling class,
                or the calling module outside a class.
        """
        if subject is None:
            name = resolve_caller_name(_INSTANCE_CODE)
        elif isinstance(subject, str):
            name = subject
        elif isinstance(subject, type):
            name = f"{subject.__module__}.{subject.__qualname__}"
        elif isinstance(subject, ModuleType):
            name = subject.__name__
        else:
            raise TypeError(f"Cannot name a logger after {type(subject).__name__!r}")
        return get_factory().logger(name)

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def level(self) -> Level:
        ...

    @abstractmethod
    def is_enabled(self) -> bool:
        ...

    @abstractmethod
    def at_level(self, level: Level) -> "Logger":
        """
        Same-named logger at ``level``; ``self`` if unchanged, the no-op
        logger for ``Level.OFF``.
        """
        ...

    @abstractmethod
    def log(self, message: Any = "", *args: Any, exc_info: Optional[BaseException] = None) -> None:
        """
        Log at this handle's level.

        ``message`` and ``args`` may be ``Deferred`` values, evaluated only
        if the level is enabled. A lone exception as ``message`` is logged
        with an empty message.
        """
        ...

    def at_trace(self) -> "Logger":
        return self.at_level(Level.TRACE)

    def at_debug(self) -> "Logger":
        return self.at_level(Level.DEBUG)

    def at_info(self) -> "Logger":
        return self.at_level(Level.INFO)

    def at_warn(self) -> "Logger":
        return self.at_level(Level.WARN)

    def at_error(self) -> "Logger":
        return self.at_level(Level.ERROR)


_INSTANCE_CODE = Logger.instance.__func__.__code__


class LoggerFactory(ABC):
    @abstractmethod
    def logger(self, name: str) -> Logger:
        """Logger for ``name`` at the factory's default level."""
        ...


_factory: Optional[LoggerFactory] = None
_factory_lock = threading.Lock()
_selecting = threading.local()


def get_factory() -> LoggerFactory:
    """
    Factory backing ``Logger.instance``, selected once per process.

    The factory is built outside the lock and published only if no other
    thread published one first, so a factory constructor may itself acquire
    loggers from other threads.

    Raises:
        FactoryNotFoundError: If selection fails, or the factory's
            constructor re-enters ``get_factory`` on the same thread.
    """
    global _factory
    factory = _factory
    if factory is not None:
        return factory

    if getattr(_selecting, "active", False):
        raise FactoryNotFoundError("Logger factory constructor requested a logger before selection finished")

    name = LogframeSettings.from_env().factory
    _selecting.active = True
    try:
        candidate = load_factory(name)
    finally:
        _selecting.active = False

    with _factory_lock:
        if _factory is None:
            _factory = candidate
        factory = _factory

    if factory is candidate:
        factory.logger(__name__).at_debug().log(
            "logger factory selected: %s (%s)", name, type(factory).__name__
        )
    return factory


def set_factory(factory: Optional[LoggerFactory]) -> None:
    """Install ``factory`` for ``Logger.instance``; ``None`` restores discovery."""
    global _factory
    with _factory_lock:
        _factory = factory


def load_factory(name: str) -> LoggerFactory:
    """
    Instantiate the factory registered under ``name``.

    Entry points in the ``logframe.factories`` group take precedence over
    the built-in factories.

    Raises:
        FactoryNotFoundError: If no factory is registered under ``name``, or
            the registered object does not produce a ``LoggerFactory``.
    """
    factory_type = _find_entry_point(name)
    if factory_type is None:
        target = BUILTIN_FACTORIES.get(name)
        if target is None:
            raise FactoryNotFoundError(
                f"No logger factory named {name!r}",
                detail=sorted(set(BUILTIN_FACTORIES) | _entry_point_names()),
            )
        module_name, _, attr = target.partition(":")
        factory_type = getattr(importlib.import_module(module_name), attr)

    factory = factory_type()
    if not isinstance(factory, LoggerFactory):
        raise FactoryNotFoundError(
            f"Factory {name!r} produced {type(factory).__name__}, not a LoggerFactory"
        )
    return factory


def _find_entry_point(name: str) -> Optional[Any]:
    for entry_point in metadata.entry_points(group=FACTORY_ENTRY_POINT_GROUP):
        if entry_point.name == name:
            return entry_point.load()
    return None


def _entry_point_names() -> set:
    return {ep.name for ep in metadata.entry_points(group=FACTORY_ENTRY_POINT_GROUP)}
