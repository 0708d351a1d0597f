"""
Module: logger.py
Description: Structured logging configuration for the queued client.

Configures structlog for JSON output so request, retry and queue
operations can be correlated by their bound fields.

Key Components:
- Timestamp and log level processors
- Level filtering from LoggingSettings (QUEUED_LOG_LEVEL)
- get_logger() helper function

Dependencies: structlog, datetime
"""

import logging

import structlog
from datetime import datetime, timezone

from queued_client.config.settings import LoggingSettings


def _add_timestamp(logger, method_name, event_dict):
    """
    Add ISO 8601 timestamp to log entries.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Current log event dictionary

    Returns:
        Updated event dictionary with timestamp
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _add_log_level(logger, method_name, event_dict):
    """
    Add log level to event dictionary.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Current log event dictionary

    Returns:
        Updated event dictionary with level
    """
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(log_level: str) -> None:
    """
    Configure structlog JSON output filtered at the given level.

    Args:
        log_level: Validated level name from LoggingSettings (e.g. "INFO")
    """
    structlog.configure(
        processors=[
            # Add timestamp and log level
            _add_timestamp,
            _add_log_level,
            # Add exception information
            structlog.processors.format_exc_info,
            # Render as JSON, one object per line
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.WriteLoggerFactory(),
        # Drop events below the configured level
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level)),
        # Cache logger on first use for performance
        cache_logger_on_first_use=True,
    )


configure_logging(LoggingSettings().log_level)


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Messages pushed", queue="jobs", count=3)
        {"queue": "jobs", "count": 3, "event": "Messages pushed", "timestamp": "...", "level": "INFO"}
    """
    return structlog.get_logger(name)
