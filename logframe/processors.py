"""structlog processors used by the structlog binding."""

from __future__ import annotations

import threading
from typing import Any, Collection, Dict, Tuple

from structlog.processors import CallsiteParameter, CallsiteParameterAdder
from structlog.typing import EventDict, WrappedLogger

# Event-dict key carrying the module that wrote the event for client code
REPORTER_KEY = "logframe_reporter"

DEFAULT_CALLSITE_PARAMETERS = frozenset(
    {
        CallsiteParameter.MODULE,
        CallsiteParameter.FUNC_NAME,
        CallsiteParameter.LINENO,
    }
)


class ReportingCallsiteAdder:
    """
    Add call-site parameters, skipping frames of the reporting module.

    Writes made through the facade carry the adapter's module name under
    ``REPORTER_KEY``; that module and the binding module are ignored when
    looking for the first application frame, so the call site is the client
    code that called the facade. The key is always removed from the event.
    """

    def __init__(
        self,
        parameters: Collection[CallsiteParameter] = DEFAULT_CALLSITE_PARAMETERS,
        enabled: bool = True,
        ignores: Tuple[str, ...] = (__name__, "logframe.adapters"),
    ):
        self._parameters = parameters
        self._enabled = enabled
        self._ignores = ignores
        self._adders: Dict[Tuple[str, ...], CallsiteParameterAdder] = {}
        self._lock = threading.Lock()

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        reporter = event_dict.pop(REPORTER_KEY, None)
        if not self._enabled:
            return event_dict
        return self._adder_for(reporter)(logger, method_name, event_dict)

    def _adder_for(self, reporter: Any) -> CallsiteParameterAdder:
        ignores = self._ignores + (reporter,) if reporter else self._ignores
        adder = self._adders.get(ignores)
        if adder is None:
            with self._lock:
                adder = self._adders.get(ignores)
                if adder is None:
                    adder = CallsiteParameterAdder(
                        parameters=self._parameters,
                        additional_ignores=list(ignores),
                    )
                    self._adders[ignores] = adder
        return adder
