from .levels import Level
from .errors import (
    LogframeError,
    ErrorCategory,
    CallerNotFoundError,
    FactoryNotFoundError,
    ConfigurationError,
)
from .deferred import Deferred
from .api import Logger, LoggerFactory, get_factory, set_factory
from .noop import NoopLogger, NOOP_LOGGER
from .cache import InstanceCache
from .logger import EngineLogger, EngineLoggerFactory
from .config import LogframeSettings, configure_structlog
from .adapters import EngineAdapter, StructlogAdapter, StructlogLoggerFactory

__all__ = [
    # Facade
    "Logger",
    "Level",
    "Deferred",
    "LoggerFactory",
    "get_factory",
    "set_factory",
    # Handles
    "EngineLogger",
    "EngineLoggerFactory",
    "NoopLogger",
    "NOOP_LOGGER",
    "InstanceCache",
    # Engines
    "EngineAdapter",
    "StructlogAdapter",
    "StructlogLoggerFactory",
    # Config
    "LogframeSettings",
    "configure_structlog",
    # Errors
    "LogframeError",
    "ErrorCategory",
    "CallerNotFoundError",
    "FactoryNotFoundError",
    "ConfigurationError",
]
