from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Tuple


@dataclass(frozen=True)
class Deferred:
    """
    A log value computed only when the log call is actually emitted.

    Usage:
        logger.at_debug().log("state %s", Deferred(lambda: expensive_dump()))
    """
    supplier: Callable[[], Any]

    def get(self) -> Any:
        return self.supplier()


def resolve(value: Any) -> Any:
    if isinstance(value, Deferred):
        return value.get()
    return value


def resolve_all(values: Iterable[Any]) -> Tuple[Any, ...]:
    return tuple(resolve(value) for value in values)
