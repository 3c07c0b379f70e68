"""
Unit tests for logging configuration and the logging service.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest
import structlog
from rich.logging import RichHandler

from creator_analytics.core import logging as logging_module
from creator_analytics.core.logging import (
    LoggingService, log_error, setup_logging
)


@pytest.fixture
def restore_logging():
    """Restore root handlers and structlog defaults after a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestHelpers:
    """Tests for the error payload helper."""

    def test_log_error(self):
        """Test the error payload includes the context when given."""
        payload = log_error(ValueError("boom"), {"operation": "analyze"})
        assert payload == {
            "error_type": "ValueError",
            "error_message": "boom",
            "event": "error",
            "context": {"operation": "analyze"},
        }
        assert "context" not in log_error(ValueError("boom"))


class TestSetupLogging:
    """Tests for structlog configuration."""

    def test_production_uses_json(self, monkeypatch, restore_logging):
        """Test JSON rendering outside debug mode."""
        monkeypatch.setattr(logging_module.settings, "DEBUG", False)

        setup_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_debug_uses_rich(self, monkeypatch, restore_logging):
        """Test rich console output in debug mode."""
        monkeypatch.setattr(logging_module.settings, "DEBUG", True)

        setup_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert isinstance(logging.getLogger().handlers[0], RichHandler)


class TestLoggingService:
    """Tests for the observability sink."""

    def test_log_error(self):
        """Test faults are logged with their type, message and context."""
        logger = MagicMock()
        error = RuntimeError("connection reset")

        with patch.object(logging_module, "get_logger", return_value=logger):
            LoggingService().log_error(error, {"operation": "compare_content_types"})

        logger.error.assert_called_once_with(
            "error",
            exc_info=error,
            error_type="RuntimeError",
            error_message="connection reset",
            context={"operation": "compare_content_types"},
        )

    def test_log_warning(self):
        """Test warnings carry the given context."""
        logger = MagicMock()

        with patch.object(logging_module, "get_logger", return_value=logger):
            LoggingService().log_warning({"operation": "analyze_audience_sensitivity"})

        logger.warning.assert_called_once_with("warning", operation="analyze_audience_sensitivity")
