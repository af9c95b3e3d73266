from __future__ import annotations

from typing import Any, Optional

from .api import Logger
from .levels import Level


class NoopLogger(Logger):
    """Logger for ``Level.OFF``: always disabled, every call does nothing."""

    __slots__ = ()

    @property
    def name(self) -> str:
        return "noop"

    @property
    def level(self) -> Level:
        return Level.OFF

    def is_enabled(self) -> bool:
        return False

    def at_level(self, level: Level) -> Logger:
        return self

    def log(self, message: Any = "", *args: Any, exc_info: Optional[BaseException] = None) -> None:
        return None

    def __repr__(self) -> str:
        return "NoopLogger()"


NOOP_LOGGER = NoopLogger()
