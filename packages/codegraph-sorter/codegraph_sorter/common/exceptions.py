"""
Sorter Exception Hierarchy

Standardized errors for the sort engine and its outer layers.

Usage guide:
    1. Engine errors (InvariantViolation, UnknownChunkPlacement, ...) are
       programming errors. The engine never recovers from them.
    2. The fixer catches SorterError per file, logs it and leaves the
       file untouched. A partial edit is never applied.
    3. External failures (I/O, parser) are wrapped in a SorterError subclass.

Example:
    try:
        source = SourceCode.parse(source_file)
    except ParseError as e:
        logger.warning("file_skipped", path=path, error=str(e))
"""

from typing import Any


class SorterError(Exception):
    """Base exception for all sorter errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize sorter error.

        Args:
            message: Human-readable error message
            details: Optional additional details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


# ============================================================
# Engine Errors
# ============================================================


class InvariantViolation(SorterError):
    """A precondition of the engine does not hold (chunk order, token layout, ...)."""

    pass


class UnknownChunkPlacement(InvariantViolation):
    """A chunk classifier returned something that is not a ChunkPlacement."""

    pass


class UnsupportedPunctuationError(InvariantViolation):
    """A module path contains punctuation outside the sort-key permutation table."""

    pass


class OverlappingEditsError(InvariantViolation):
    """Two edits produced for one text touch the same range."""

    pass


# ============================================================
# Input Errors
# ============================================================


class ParseError(SorterError):
    """Source text could not be parsed without errors."""

    pass


class InvalidConfigurationError(SorterError):
    """Invalid group patterns or settings."""

    pass
