"""
Root conftest: import path and shared fixtures.

This file exists at the project root so the project directory is on
sys.path before pytest starts collecting tests, and so every test package
can use the recording engine below instead of a real logging backend.
"""

import sys
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Tuple

import pytest

ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from logframe.adapters.base import EngineAdapter  # noqa: E402
from logframe.api import set_factory  # noqa: E402
from logframe.levels import Level  # noqa: E402
from logframe.logger import EngineLoggerFactory  # noqa: E402


@dataclass
class WriteRecord:
    channel: str
    reporter: str
    level: Level
    message: str
    args: Tuple[Any, ...]
    exc_info: Optional[BaseException]


class RecordingEngine(EngineAdapter):
    """In-memory engine that records channels and writes."""

    def __init__(self, threshold: Level = Level.INFO, open_delay: float = 0.0):
        self.threshold = threshold
        self.open_delay = open_delay
        self.opened: List[str] = []
        self.writes: List[WriteRecord] = []
        self.enabled_checks = 0
        self._lock = threading.Lock()

    def channel(self, name: str) -> Any:
        if self.open_delay:
            # Widen the window for racing constructors
            time.sleep(self.open_delay)
        with self._lock:
            self.opened.append(name)
        return name

    def is_enabled(self, channel: Any, level: Level) -> bool:
        self.enabled_checks += 1
        return level >= self.threshold

    def write(self, channel, reporter, level, message, args, exc_info=None) -> None:
        self.writes.append(WriteRecord(channel, reporter, level, message, tuple(args), exc_info))


class CountingSupplier:
    """Zero-argument callable that counts its invocations."""

    def __init__(self, value: Any = "supplied"):
        self.value = value
        self.calls = 0

    def __call__(self) -> Any:
        self.calls += 1
        return self.value


@pytest.fixture
def engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture
def factory(engine) -> EngineLoggerFactory:
    return EngineLoggerFactory(engine)


@pytest.fixture
def installed_factory(factory):
    """Route Logger.instance through the recording factory."""
    set_factory(factory)
    yield factory
    set_factory(None)


@pytest.fixture(autouse=True)
def _reset_factory():
    yield
    set_factory(None)
