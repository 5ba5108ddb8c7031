"""Cross-cutting concerns: errors and logging."""

from .exceptions import (
    InvalidConfigurationError,
    InvariantViolation,
    OverlappingEditsError,
    ParseError,
    SorterError,
    UnknownChunkPlacement,
    UnsupportedPunctuationError,
)
from .observability import get_logger, setup_logging

__all__ = [
    "InvalidConfigurationError",
    "InvariantViolation",
    "OverlappingEditsError",
    "ParseError",
    "SorterError",
    "UnknownChunkPlacement",
    "UnsupportedPunctuationError",
    "get_logger",
    "setup_logging",
]
