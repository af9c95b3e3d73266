from .base import EngineAdapter
from .structlog_adapter import StructlogAdapter, StructlogLoggerFactory

__all__ = ["EngineAdapter", "StructlogAdapter", "StructlogLoggerFactory"]
