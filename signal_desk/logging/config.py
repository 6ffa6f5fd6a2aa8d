"""
Centralized logging configuration for the signal desk.

This module provides standardized logging configuration using structlog
for all components. Every module obtains its logger through
``structlog.get_logger(__name__)`` so that a single call to
``configure_logging`` controls formatting for the whole package.
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
    module_levels: Optional[dict[str, str]] = None,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the signal desk.

    Args:
        level: Root logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, render JSON lines; otherwise console output
        include_timestamp: Add an ISO timestamp to each event
        include_caller: Add filename and line number to each event
        module_levels: Per-logger overrides, e.g. ``{"signal_desk.indicators": "WARNING"}``
            to quiet the per-refresh indicator debug events
        extra_processors: Additional structlog processors inserted before rendering

    Raises:
        ValueError: If a level name is unknown
    """
    # Resolve level names up front so a typo fails at startup
    root_level = _resolve_level(level)
    overrides = {name: _resolve_level(value) for name, value in (module_levels or {}).items()}

    # Standard library handler; structlog renders the message
    logging.basicConfig(
        level=root_level,
        stream=sys.stdout,
        format="%(message)s"
    )
    for name, value in overrides.items():
        logging.getLogger(name).setLevel(value)

    # Shared processor chain
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

    # Caller info
    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    # Renderer goes last
    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _resolve_level(name: str) -> int:
    value = logging.getLevelName(name.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown logging level: {name}")
    return value


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_decision_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for signal and exit decisions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger with the decision subsystem bound
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="decision",
        audit_trail=True
    )


def log_signal_decision(
    logger: FilteringBoundLogger,
    symbol: str,
    direction: str,
    confidence: int,
    bull_score: float,
    bear_score: float,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a signal decision with standardized format.

    Args:
        logger: Structlog logger instance
        symbol: Instrument the signal was computed for
        direction: BUY, SELL or WAIT
        confidence: Final confidence after session dampening
        bull_score: Bullish accumulator
        bear_score: Bearish accumulator
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        direction=direction,
        confidence=confidence,
        bull_score=bull_score,
        bear_score=bear_score,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if direction == "WAIT":
        bound_logger.debug("Signal decision")
    else:
        bound_logger.info("Signal decision")


def log_exit_decision(
    logger: FilteringBoundLogger,
    symbol: str,
    should_exit: bool,
    reasons: list[str],
    unrealized_pnl_pct: float
) -> None:
    """
    Log an exit verdict for an open position.

    Args:
        logger: Structlog logger instance
        symbol: Instrument of the open position
        should_exit: Verdict
        reasons: Fired exit reasons
        unrealized_pnl_pct: Directional P&L percentage at the evaluated price
    """
    bound_logger = logger.bind(
        symbol=symbol,
        should_exit=should_exit,
        reasons=reasons,
        unrealized_pnl_pct=unrealized_pnl_pct,
    )

    if should_exit:
        bound_logger.warning("Exit condition met")
    else:
        bound_logger.debug("Position holds")
