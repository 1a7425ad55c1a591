"""
Centralized logging configuration for the GBCE trade indicator service.

This module provides standardized logging configuration using structlog
for all components. The cache, the ledger and the calculation engine all log
through loggers obtained here so that eviction and calculation events share
one structured format.
"""
import logging
import sys
from decimal import Decimal
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
        stream=sys.stdout,
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
        # Decimals are not JSON native, render them as strings to keep precision
        processors.append(structlog.processors.JSONRenderer(default=str))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

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


def get_cache_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for the trade ledger and recent-trades cache.

    Eviction and aged-out events are part of the audit trail, so this
    logger is bound with the subsystem and audit markers.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for cache events
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="trade_cache",
        audit_trail=True
    )


def get_calculation_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for indicator calculations.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for the calculation engine
    """
    return get_logger(name).bind(subsystem="calculation")


def log_eviction(
    logger: FilteringBoundLogger,
    symbol: str,
    trade_count: int,
    cause: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a cache bucket eviction with standardized format.

    Args:
        logger: Structlog logger instance
        symbol: Symbol whose bucket was removed
        trade_count: Number of trades in the removed bucket
        cause: Why the bucket was removed (expired, explicit)
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        trade_count=trade_count,
        cause=cause,
        event="bucket_evicted"
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Trade bucket evicted")


def log_calculation(
    logger: FilteringBoundLogger,
    metric: str,
    symbol: Optional[str],
    result: Decimal,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a completed indicator calculation with standardized format.

    Args:
        logger: Structlog logger instance
        metric: Indicator name (dividend_yield, pe_ratio, vwap, share_index)
        symbol: Stock symbol, None for market-wide indicators
        result: Calculated value
        context: Additional context data (inputs, trade counts)
    """
    bound_logger = logger.bind(
        metric=metric,
        symbol=symbol,
        result=str(result),
        event="calculation"
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Calculation completed")
