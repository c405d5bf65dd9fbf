"""Structured logging for FormatConverter.

Log events never carry file payloads: raw bytes are replaced by their size
and long column lists are shortened before rendering.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from formatconverter.config import get_settings
from formatconverter.conversion.result import ConversionResult
from formatconverter.exceptions import OutputWriteError

MAX_VALUE_LENGTH = 512
MAX_LISTED_COLUMNS = 20

# Libraries that log every multipart part or HTTP hop at DEBUG
NOISY_LOGGERS = ("multipart", "python_multipart", "httpx", "httpcore")


def add_timestamp(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add an ISO 8601 UTC timestamp."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def redact_payloads(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Replace raw file content with its size."""
    for key, value in event_dict.items():
        if isinstance(value, (bytes, bytearray, memoryview)):
            event_dict[key] = f"<{len(value)} bytes>"
    return event_dict


def shorten_values(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Cap long strings and column lists; tracebacks are left whole."""
    for key, value in event_dict.items():
        if key == "exception":
            continue

        if isinstance(value, str) and len(value) > MAX_VALUE_LENGTH:
            event_dict[key] = value[:MAX_VALUE_LENGTH] + "..."
        elif isinstance(value, (list, tuple)) and len(value) > MAX_LISTED_COLUMNS:
            hidden = len(value) - MAX_LISTED_COLUMNS
            event_dict[key] = [*value[:MAX_LISTED_COLUMNS], f"... {hidden} more"]

    return event_dict


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Configure structlog on top of the standard library root logger.

    Args:
        level: Level overriding the configured ``log_level``
        log_format: "json" or "text", overriding the configured ``log_format``
    """
    settings = get_settings()
    effective_level = getattr(logging, (level or settings.log_level).upper())

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        redact_payloads,
        shorten_values,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if (log_format or settings.log_format) == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=effective_level,
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(effective_level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)


def log_conversion(
    logger: structlog.stdlib.BoundLogger,
    conversion: str,
    result: ConversionResult,
    **kwargs: Any,
) -> None:
    """Log the outcome of one conversion with its size and timing figures."""
    if not result.success:
        logger.warning(
            "conversion_rejected",
            conversion=conversion,
            error_kind=result.error_kind.value if result.error_kind else None,
            error=result.error_message,
            source_size_bytes=result.source_size_bytes,
            **kwargs,
        )
        return

    logger.info(
        "conversion_succeeded",
        conversion=conversion,
        rows=result.row_count,
        columns=result.metadata.get("columns", []),
        source_size_bytes=result.source_size_bytes,
        dest_size_bytes=result.dest_size_bytes,
        size_ratio=round(result.size_ratio, 3),
        throughput_mbps=round(result.throughput_mbps, 2),
        duration_seconds=round(result.duration_seconds, 4),
        **kwargs,
    )


def log_output_error(
    logger: structlog.stdlib.BoundLogger,
    conversion: str,
    error: OutputWriteError,
) -> None:
    """Log a converted payload that could not be written."""
    logger.error(
        "output_write_failed",
        conversion=conversion,
        path=error.context.get("path"),
        details=error.context.get("details"),
    )
