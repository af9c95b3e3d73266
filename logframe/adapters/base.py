from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from logframe.levels import Level


class EngineAdapter(ABC):
    """Operations the facade consumes from the underlying logging engine."""

    @abstractmethod
    def channel(self, name: str) -> Any:
        """Obtain or create the engine's channel named ``name``."""
        ...

    @abstractmethod
    def is_enabled(self, channel: Any, level: Level) -> bool:
        ...

    @abstractmethod
    def write(
        self,
        channel: Any,
        reporter: str,
        level: Level,
        message: str,
        args: Sequence[Any],
        exc_info: Optional[BaseException] = None,
    ) -> None:
        """
        Emit one event.

        ``reporter`` names the module issuing the write on behalf of client
        code; engines that record call sites skip its frames.
        """
        ...
