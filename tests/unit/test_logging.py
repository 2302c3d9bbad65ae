"""Unit tests for the logging configuration module."""

import logging
from unittest.mock import MagicMock, patch

import pytest
import structlog

from embedwatch.logging import REDACTED, get_logger, redact_credentials, setup_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    """Reset root logger and structlog state around each test."""
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level
    logging.root.handlers.clear()
    yield
    logging.root.handlers.clear()
    logging.root.handlers.extend(original_handlers)
    logging.root.setLevel(original_level)
    structlog.reset_defaults()


def _settings(level="INFO", development=False):
    mock_settings = MagicMock()
    mock_settings.log_level = level
    mock_settings.is_development = development
    return mock_settings


class TestSetupLogging:
    """Tests for setup_logging function."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("DEBUG", logging.DEBUG),
            ("warning", logging.WARNING),
            ("NONEXISTENT", logging.INFO),
        ],
    )
    def test_basic_config_level(self, level, expected):
        with patch("embedwatch.logging.get_settings", return_value=_settings(level)):
            with patch("embedwatch.logging.logging.basicConfig") as mock_basic:
                setup_logging()

        assert mock_basic.call_args.kwargs["level"] == expected

    def test_quiets_discord_logger(self):
        with patch("embedwatch.logging.get_settings", return_value=_settings("DEBUG")):
            setup_logging()

        assert logging.getLogger("discord").level == logging.WARNING
        assert logging.getLogger("aiohttp.access").level == logging.WARNING

    def test_development_uses_console_renderer(self):
        with patch("embedwatch.logging.get_settings", return_value=_settings(development=True)):
            setup_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_production_uses_json_renderer(self):
        with patch("embedwatch.logging.get_settings", return_value=_settings()):
            setup_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_redaction_runs_before_renderer(self):
        with patch("embedwatch.logging.get_settings", return_value=_settings()):
            setup_logging()

        processors = structlog.get_config()["processors"]
        assert processors[-2] is redact_credentials


class TestRedactCredentials:
    """Tests for the credential-masking processor."""

    def test_masks_credential_keys(self):
        event = {
            "event": "query_received",
            "key": "S",
            "Authorization": "Bearer S",
            "discord_token": "t",
        }
        result = redact_credentials(None, "info", event)
        assert result == {
            "event": "query_received",
            "key": REDACTED,
            "Authorization": REDACTED,
            "discord_token": REDACTED,
        }

    def test_leaves_other_keys_untouched(self):
        event = {"event": "query_served", "caller_id": "42", "count": 3}
        assert redact_credentials(None, "info", dict(event)) == event


class TestGetLogger:
    """Tests for get_logger."""

    def test_returns_usable_logger(self):
        log = get_logger("embedwatch.test")
        assert hasattr(log, "info")
        assert hasattr(log, "warning")
