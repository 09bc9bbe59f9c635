"""Logging configuration for ingressgen using structlog."""

import logging
import os
import sys
from typing import Any

import structlog


def setup_logging(verbose: bool = False) -> None:
    """Setup structured logging configuration.

    Log output goes to stderr; stdout is reserved for the generated manifests.

    Args:
        verbose: If True, enables DEBUG logging regardless of LOG_LEVEL env var
    """
    if verbose:
        log_level = "DEBUG"
    else:
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    numeric_level = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _get_renderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger(__name__)
    logger.debug("Logging configured", log_level=log_level, verbose=verbose)


def _get_renderer() -> Any:
    """Get the appropriate log renderer based on environment."""
    log_format = os.getenv("LOG_FORMAT", "console").lower()

    if log_format == "json":
        return structlog.processors.JSONRenderer()
    else:
        return structlog.dev.ConsoleRenderer(
            colors=False,
            exception_formatter=structlog.dev.plain_traceback,
        )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name, typically __name__

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_function_entry(logger: structlog.stdlib.BoundLogger, func_name: str, **kwargs: Any) -> None:
    """Log function entry with parameters."""
    logger.debug("Function entry", function=func_name, **kwargs)


def log_function_exit(logger: structlog.stdlib.BoundLogger, func_name: str, **kwargs: Any) -> None:
    """Log function exit with return values."""
    logger.debug("Function exit", function=func_name, **kwargs)


def log_build_event(logger: structlog.stdlib.BoundLogger, event_type: str, **kwargs: Any) -> None:
    """Log manifest build events.

    Args:
        logger: The logger instance
        event_type: Type of build event (group_added, resource_emitted, ...)
        **kwargs: Event details
    """
    logger.info("Build event", event_type=event_type, **kwargs)
