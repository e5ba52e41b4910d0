"""Structured logging infrastructure for stackchart.

This module provides JSON-formatted structured logging with common fields
for monitoring and debugging widget render passes.
"""

import json
import logging
import os
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

__all__ = ["StructuredFormatter", "StructuredLogger", "configure_logging", "get_logger"]

LOG_LEVEL_ENV = "STACKCHART_LOG_LEVEL"

_EXCLUDED_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
    }
)


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs JSON-structured log entries."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            JSON-formatted log string.
        """
        log_entry: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update({key: value for key, value in record.__dict__.items() if key not in _EXCLUDED_FIELDS})
        if record.exc_info:
            log_entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class StructuredLogger:
    """Wrapper around standard logger with structured logging support."""

    def __init__(self, logger: logging.Logger) -> None:
        """Initialize structured logger.

        Args:
            logger: The underlying Python logger instance.
        """
        self._logger = logger

    def _log(self, level: int, msg: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Internal log method with extra fields support.

        Args:
            level: Log level.
            msg: Log message.
            exc_info: Attach the active exception to the record.
            **kwargs: Additional fields to include in the log entry.
        """
        self._logger.log(level, msg, exc_info=exc_info, extra=dict(kwargs))

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log error message."""
        self._log(logging.ERROR, msg, **kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log error message with the active exception attached."""
        self._log(logging.ERROR, msg, exc_info=True, **kwargs)


def _level_from_env() -> int:
    return getattr(logging, os.getenv(LOG_LEVEL_ENV, "INFO").upper(), logging.INFO)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module).

    Returns:
        Configured StructuredLogger instance.
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False
        logger.setLevel(_level_from_env())

    return StructuredLogger(logger)


def configure_logging(level: int | None = None, stream: TextIO | None = None) -> None:
    """Route every stackchart logger to one stream at one level.

    Args:
        level: Log level; defaults to the STACKCHART_LOG_LEVEL environment variable.
        stream: Output stream; defaults to stdout.
    """
    resolved = level if level is not None else _level_from_env()
    target = stream or sys.stdout
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if not isinstance(logger, logging.Logger) or not name.startswith("stackchart"):
            continue
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        handler = logging.StreamHandler(target)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False
        logger.setLevel(resolved)
