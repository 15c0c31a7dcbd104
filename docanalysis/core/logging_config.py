"""Structured logging configuration.

JSON-formatted records with a fixed set of correlation fields so that one
analysis request can be followed from upload through every status query.
Development runs get a one-line console format that keeps the same fields.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Fields copied from logger.info(..., extra={...}); anything else is dropped
EXTRA_FIELDS = (
    "trace_id",
    "operation_id",
    "attempt",
    "elapsed_seconds",
    "status",
    "error_code",
    "service",
    "duration_ms",
    "http_status",
)

NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {key: getattr(record, key) for key in EXTRA_FIELDS if hasattr(record, key)}


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Example:
        >>> logger.info("Operation accepted", extra={"operation_id": "op-123"})
        # Output: {"timestamp": "2026-10-18T09:12:00Z", "level": "INFO",
        #          "message": "Operation accepted", "operation_id": "op-123", ...}
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_data = {
            "timestamp": created.strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        log_data.update(_extra_fields(record))

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            log_data["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable single line with the correlation fields appended."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _extra_fields(record)
        if fields:
            line += " [" + " ".join(f"{k}={v}" for k, v in fields.items()) + "]"
        return line


def configure_structured_logging(
    level: str = "INFO",
    json_format: bool = True,
) -> None:
    """Configure root logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: JSON records (True) or the console format (False)
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter() if json_format else ConsoleFormatter())
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
