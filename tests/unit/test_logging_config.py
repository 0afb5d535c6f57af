"""Tests for logging helpers."""

import logging
from unittest.mock import MagicMock

import pytest

from photowall.logging_config import LogContext, get_log_level, log_context


class TestGetLogLevel:
    """Test LOG_LEVEL resolution."""

    def test_known_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert get_log_level() == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        assert get_log_level() == logging.INFO


class TestLogContext:
    """Test binding structured context."""

    def test_binds_context(self):
        logger = MagicMock()

        with log_context(logger, operation="delete_photo", photo_id=3) as bound:
            bound.info("photo_removed_from_gallery")

        logger.bind.assert_called_once_with(operation="delete_photo", photo_id=3)
        assert bound is logger.bind.return_value
        bound.error.assert_not_called()

    def test_logs_and_reraises_exceptions(self):
        logger = MagicMock()

        with pytest.raises(RuntimeError):
            with LogContext(logger, operation="upload"):
                raise RuntimeError("stream closed")

        bound = logger.bind.return_value
        bound.error.assert_called_once_with(
            "context_exception", exception_type="RuntimeError", exception_message="stream closed"
        )

    def test_default_logger(self):
        with log_context(operation="render") as bound:
            assert bound is not None
