"""
Centralized logging configuration for the training plan loader.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the package should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_resolution_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the reference resolution subsystem.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for fetch and cache events
    """
    return get_logger(name).bind(subsystem="resolution")


def log_fetch(
    logger: FilteringBoundLogger,
    locator: str,
    cache_hit: bool,
    type_name: str,
    byte_count: Optional[int] = None,
    duration_ms: Optional[float] = None,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a locator lookup with standardized format.

    Args:
        logger: Structlog logger instance
        locator: Locator being loaded
        cache_hit: Whether the value came from the session cache
        type_name: Name of the node type requested for the locator
        byte_count: Size of the fetched document, if fetched
        duration_ms: Fetch and decode time, if fetched
        context: Additional context data
    """
    bound_logger = logger.bind(
        locator=locator,
        cache_hit=cache_hit,
        value_type=type_name,
    )

    if byte_count is not None:
        bound_logger = bound_logger.bind(byte_count=byte_count)
    if duration_ms is not None:
        bound_logger = bound_logger.bind(duration_ms=round(duration_ms, 3))
    if context:
        bound_logger = bound_logger.bind(context=context)

    if cache_hit:
        bound_logger.debug("Reference served from cache")
    else:
        bound_logger.info("Reference fetched")
