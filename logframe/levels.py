from __future__ import annotations

from enum import IntEnum

from .errors import ConfigurationError


class Level(IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    OFF = 5  # disables the handle entirely

    @classmethod
    def parse(cls, value: str) -> "Level":
        """Parse a level name such as ``"info"`` or ``"WARNING"``."""
        key = value.strip().upper()
        if key == "WARNING":
            key = "WARN"
        try:
            return cls[key]
        except KeyError:
            raise ConfigurationError(f"Unknown log level {value!r}") from None


# Levels a handle can be bound to; OFF is routed to the no-op handle instead.
ACTIVE_LEVELS = tuple(level for level in Level if level is not Level.OFF)
