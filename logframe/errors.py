from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorCategory(str, Enum):
    CALLER_NOT_FOUND = "caller_not_found"
    FACTORY_NOT_FOUND = "factory_not_found"
    CONFIGURATION = "configuration"


@dataclass
class LogframeError(Exception):
    category: ErrorCategory
    message: str
    detail: Optional[Any] = None

    def __str__(self) -> str:
        return f"{self.category.value}: {self.message}"


class CallerNotFoundError(LogframeError):
    """Raised when the facade entry point is missing from the calling stack."""

    def __init__(self, message: str, detail: Optional[Any] = None):
        super().__init__(ErrorCategory.CALLER_NOT_FOUND, message, detail)


class FactoryNotFoundError(LogframeError):
    def __init__(self, message: str, detail: Optional[Any] = None):
        super().__init__(ErrorCategory.FACTORY_NOT_FOUND, message, detail)


class ConfigurationError(LogframeError):
    def __init__(self, message: str, detail: Optional[Any] = None):
        super().__init__(ErrorCategory.CONFIGURATION, message, detail)
