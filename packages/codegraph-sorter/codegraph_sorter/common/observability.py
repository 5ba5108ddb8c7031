"""
Structured Logging with structlog

Provides structured, contextual logging for the sorter CLI and fixer.
"""

import logging
import sys

import structlog
from structlog.contextvars import merge_contextvars


def setup_logging(
    level: str = "WARNING",
    format: str = "console",  # "json" or "console"
    include_timestamp: bool = False,
) -> None:
    """
    Setup structured logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format ("json" for machines, "console" for humans)
        include_timestamp: Include ISO timestamp in logs
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    # Logs go to stderr, stdout is reserved for diffs and reports
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric_level, force=True)

    shared_processors = [
        merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if include_timestamp:
        shared_processors.append(structlog.processors.TimeStamper(fmt="iso"))

    shared_processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]
    )

    if format == "json":
        output_processors = [
            structlog.processors.EventRenamer("message"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        output_processors = [
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.RichTracebackFormatter(),
            )
        ]

    structlog.configure(
        processors=[structlog.stdlib.filter_by_level, *shared_processors, *output_processors],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__ from calling module)

    Returns:
        Structured logger instance

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("file_sorted", path="src/index.ts", edits=2)
        ```
    """
    return structlog.get_logger(name)
