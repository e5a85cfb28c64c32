# ABOUTME: Tests for logging configuration module
# ABOUTME: Validates dual-mode logging setup, stdlib interception and third-party suppression

import logging
import os
from pathlib import Path
from unittest.mock import patch

import structlog
from loguru import logger as loguru_logger

from sprite_composer.utils.logging.config import (
    QUIET_LOGGERS,
    InterceptHandler,
    LoggingMode,
    configure_logging,
    detect_logging_mode,
    get_logging_status,
)


class TestLoggingMode:
    """Test the LoggingMode constants."""

    def test_logging_mode_constants(self):
        assert LoggingMode.INTERACTIVE == "interactive"
        assert LoggingMode.PRODUCTION == "production"


class TestDetectLoggingMode:
    """Test logging mode detection logic."""

    def test_detect_mode_from_env_interactive(self):
        with patch.dict(os.environ, {"SPRITE_COMPOSER_LOG_MODE": "interactive"}):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_env_production(self):
        with patch.dict(os.environ, {"SPRITE_COMPOSER_LOG_MODE": "PRODUCTION"}):
            assert detect_logging_mode() == LoggingMode.PRODUCTION

    def test_detect_mode_from_env_invalid(self):
        """Invalid values fall back to TTY detection."""
        with (
            patch.dict(os.environ, {"SPRITE_COMPOSER_LOG_MODE": "invalid"}),
            patch("sys.stdout.isatty", return_value=True),
        ):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_tty_production(self):
        with patch.dict(os.environ, {}, clear=True), patch("sys.stdout.isatty", return_value=False):
            assert detect_logging_mode() == LoggingMode.PRODUCTION


class TestConfigureLogging:
    """Test logging configuration functionality."""

    def teardown_method(self):
        """Restore default logging, structlog and loguru state."""
        for logger_name in ["", *QUIET_LOGGERS, "py.warnings"]:
            std_logger = logging.getLogger(logger_name)
            std_logger.handlers.clear()
            std_logger.setLevel(logging.NOTSET)

        logging.captureWarnings(False)
        structlog.reset_defaults()
        loguru_logger.remove()

    def test_configure_interactive_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO")

        assert Path("logs").is_dir()
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_interactive_mode_writes_log_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        log_file = tmp_path / "custom.log"

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO", log_file=str(log_file))
        structlog.get_logger("sprite_composer.test").info("Saved sprite", character="Alice")
        loguru_logger.remove()

        content = log_file.read_text(encoding="utf-8")
        assert "Saved sprite" in content
        assert "character='Alice'" in content

    def test_configure_production_mode(self):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="INFO")

        for logger_name in QUIET_LOGGERS:
            assert logging.getLogger(logger_name).level == logging.WARNING

    def test_configure_custom_log_level(self):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_stdlib_records_are_intercepted(self):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="INFO")

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], InterceptHandler)

    def test_warnings_captured(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        configure_logging(mode=LoggingMode.INTERACTIVE)

        assert logging.getLogger("py.warnings").level == logging.ERROR


class TestGetLoggingStatus:
    """Test logging status reporting."""

    def test_get_status_interactive_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        Path("logs").mkdir()

        with patch("sprite_composer.utils.logging.config.detect_logging_mode", return_value=LoggingMode.INTERACTIVE):
            status = get_logging_status()

        assert status["mode"] == LoggingMode.INTERACTIVE
        assert status["log_directory"] is not None
        assert status["log_files"]["main"].endswith("sprite-composer.log")
        assert status["log_files"]["errors"].endswith("errors.log")
        assert "httpx" in status["third_party_suppressed"]

    def test_get_status_production_mode(self):
        with patch("sprite_composer.utils.logging.config.detect_logging_mode", return_value=LoggingMode.PRODUCTION):
            status = get_logging_status()

        assert status["mode"] == LoggingMode.PRODUCTION
        assert status["log_files"] == {"main": None, "json": None, "errors": None}
