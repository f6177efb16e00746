"""
Centralized logging configuration for the bidding engine.

This module provides standardized logging configuration using structlog
for all components. Rule-tree decisions and auction transitions are logged
through the helpers below so every record carries the same fields.
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
        processors.append(structlog.processors.JSONRenderer())
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


def get_decision_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for rule-tree decisions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger bound to the rule_tree subsystem
    """
    return get_logger(name).bind(
        subsystem="rule_tree",
        audit_trail=True
    )


def get_auction_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for auction state transitions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger bound to the auction subsystem
    """
    return get_logger(name).bind(
        subsystem="auction",
        audit_trail=True
    )


def log_condition_decision(
    logger: FilteringBoundLogger,
    node_name: str,
    condition_name: str,
    passed: bool,
    description: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a decision-node outcome with standardized format.

    Args:
        logger: Structlog logger instance
        node_name: Name of the decision node being evaluated
        condition_name: Name of the node's condition
        passed: Whether the condition passed
        description: Context-aware description of the outcome
        context: Additional context data
    """
    bound_logger = logger.bind(
        node_name=node_name,
        condition_name=condition_name,
        condition_result="PASS" if passed else "FAIL",
        description=description,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Condition evaluated")


def log_auction_transition(
    logger: FilteringBoundLogger,
    seat: str,
    call: str,
    entry_count: int,
    is_complete: bool,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log an accepted call with standardized format.

    Args:
        logger: Structlog logger instance
        seat: Seat that made the call
        call: Call notation
        entry_count: Number of entries after the call
        is_complete: Whether the call completed the auction
        context: Additional context data
    """
    bound_logger = logger.bind(
        seat=seat,
        call=call,
        entry_count=entry_count,
        is_complete=is_complete,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if is_complete:
        bound_logger.info("Auction completed")
    else:
        bound_logger.debug("Call accepted")


def configure_from_settings(settings: dict[str, Any]) -> None:
    """
    Configure logging from the ``logging`` section of a merged configuration.

    Args:
        settings: Output of ``ConfigLoader.merge_config``
    """
    params = settings.get("logging", {})
    configure_logging(
        level=params.get("level", "INFO"),
        format_json=params.get("format_json", False),
    )
