from __future__ import annotations

import threading
from typing import Callable, Dict, Generic, TypeVar

from .levels import ACTIVE_LEVELS, Level

T = TypeVar("T")


class InstanceCache(Generic[T]):
    """
    Process-lifetime cache holding one instance per (name, level) pair.

    Lookups are lock-free; a miss takes the lock and re-checks before
    calling ``constructor``, so each key is constructed at most once even
    when threads race on it. Entries are never evicted.

    Usage:
        cache = InstanceCache(lambda name, level: Handle(name, level))
        cache.get_or_create("svc.orders", Level.INFO)
    """

    def __init__(self, constructor: Callable[[str, Level], T]):
        self._constructor = constructor
        self._entries: Dict[Level, Dict[str, T]] = {level: {} for level in ACTIVE_LEVELS}
        self._lock = threading.Lock()

    def get_or_create(self, name: str, level: Level) -> T:
        if level == Level.OFF:
            raise ValueError("Level.OFF has no cached instances")

        by_name = self._entries[level]
        instance = by_name.get(name)
        if instance is not None:
            return instance

        with self._lock:
            instance = by_name.get(name)
            if instance is None:
                instance = self._constructor(name, level)
                by_name[name] = instance
        return instance

    def __len__(self) -> int:
        return sum(len(by_name) for by_name in self._entries.values())
