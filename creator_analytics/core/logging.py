"""
Logging configuration for Creator Analytics.

This module sets up structured logging using structlog with rich formatting
for development and JSON formatting for production. It also provides the
LoggingService sink that the analytics engine reports faults to.
"""

import logging
import sys
from typing import Any, Dict, Optional

import structlog
from rich.console import Console
from rich.logging import RichHandler

from creator_analytics.core.config import settings


def setup_logging():
    """Configure application logging."""

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )

    shared_processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.DEBUG:
        # Development: Rich formatting with colors
        structlog.configure(
            processors=shared_processors + [structlog.dev.ConsoleRenderer(colors=True)],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        rich_handler = RichHandler(
            console=Console(),
            show_time=True,
            show_path=True,
            markup=True,
            rich_tracebacks=True,
        )

        root_logger = logging.getLogger()
        root_logger.handlers = [rich_handler]

    else:
        # Production: JSON formatting
        structlog.configure(
            processors=shared_processors + [structlog.processors.JSONRenderer()],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


class LoggerMixin:
    """Mixin class to add logging capabilities to any class."""

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        """Get logger instance for this class."""
        return get_logger(self.__class__.__name__)


def log_error(error: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
    """Helper function to log errors with context."""
    log_data = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "event": "error"
    }

    if context:
        log_data["context"] = context

    return log_data


class LoggingService(LoggerMixin):
    """
    Observability sink used by the analytics engine.

    Both methods are fire-and-forget: a failure while emitting a log record
    is reported to stderr by the logging module and never reaches the caller.
    """

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """Record an unexpected fault together with its operation context."""
        payload = log_error(error, context)
        event = payload.pop("event")
        self.logger.error(event, exc_info=error, **payload)

    def log_warning(self, context: Dict[str, Any]) -> None:
        """Record a non-fatal condition."""
        self.logger.warning("warning", **context)
