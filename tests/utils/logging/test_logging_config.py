# ABOUTME: Tests for logging configuration module
# ABOUTME: Validates dual-mode loguru setup, the structlog bridge and third-party library quieting

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from loguru import logger as loguru_logger

from villain_timeline.utils.logging import get_logger
from villain_timeline.utils.logging.config import (
    THIRD_PARTY_LOGGERS,
    InterceptHandler,
    LoggingMode,
    configure_logging,
    detect_logging_mode,
    get_logging_status,
)


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore stdlib and loguru logging state after each test."""
    yield

    for logger_name in ["", *THIRD_PARTY_LOGGERS, "py.warnings"]:
        std_logger = logging.getLogger(logger_name)
        std_logger.handlers.clear()
        std_logger.setLevel(logging.NOTSET)
        std_logger.propagate = True

    logging.getLogger().setLevel(logging.WARNING)
    logging.captureWarnings(False)
    loguru_logger.remove()


class TestLoggingMode:
    """Test the LoggingMode constants."""

    def test_logging_mode_constants(self):
        assert LoggingMode.INTERACTIVE == "interactive"
        assert LoggingMode.PRODUCTION == "production"


class TestDetectLoggingMode:
    """Test logging mode detection logic."""

    def test_detect_mode_from_env_interactive(self):
        with patch.dict(os.environ, {"VILLAIN_TIMELINE_LOG_MODE": "interactive"}):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_env_production(self):
        with patch.dict(os.environ, {"VILLAIN_TIMELINE_LOG_MODE": "PRODUCTION"}):
            assert detect_logging_mode() == LoggingMode.PRODUCTION

    def test_detect_mode_from_env_invalid(self):
        """Test fallback to TTY detection when the environment value is unknown."""
        with (
            patch.dict(os.environ, {"VILLAIN_TIMELINE_LOG_MODE": "invalid"}),
            patch("sys.stdout.isatty", return_value=True),
        ):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_tty_production(self):
        with patch.dict(os.environ, {}, clear=True), patch("sys.stdout.isatty", return_value=False):
            assert detect_logging_mode() == LoggingMode.PRODUCTION


class TestConfigureLogging:
    """Test logging configuration functionality."""

    def test_configure_interactive_mode(self, tmp_path, monkeypatch):
        """Test interactive mode writes log files under logs/."""
        monkeypatch.chdir(tmp_path)

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO")
        get_logger("villain_timeline.test").info("Scraped issue", issue_key=1, antagonist_count=2)
        loguru_logger.complete()

        logs_dir = tmp_path / "logs"
        assert logs_dir.is_dir()
        main_log = (logs_dir / "villain-timeline.log").read_text(encoding="utf-8")
        assert "Scraped issue" in main_log
        assert "issue_key=1" in main_log
        assert (logs_dir / "villain-timeline.json").exists()

    def test_configure_custom_log_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        custom_log_file = tmp_path / "custom.log"

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO", log_file=str(custom_log_file))
        get_logger("villain_timeline.test").warning("Failed to scrape issue", issue_key=3)

        assert "Failed to scrape issue" in custom_log_file.read_text(encoding="utf-8")

    def test_errors_log_only_receives_errors(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="DEBUG")
        log = get_logger("villain_timeline.test")
        log.info("Routine message")
        log.error("Scrape pipeline failed", error="boom")

        errors_log = (tmp_path / "logs" / "errors.log").read_text(encoding="utf-8")
        assert "Scrape pipeline failed" in errors_log
        assert "Routine message" not in errors_log

    def test_configure_production_mode(self, capsys):
        """Test production mode emits JSON lines on stdout."""
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="INFO")
        get_logger("villain_timeline.test").info("Pipeline completed", total_villains=3)

        out = capsys.readouterr().out
        assert '"text"' in out
        assert "Pipeline completed" in out

    def test_log_level_applied_to_root_logger(self):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="DEBUG")

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert any(isinstance(handler, InterceptHandler) for handler in root_logger.handlers)

    def test_third_party_loggers_quieted(self):
        configure_logging(mode=LoggingMode.PRODUCTION)

        for logger_name in THIRD_PARTY_LOGGERS:
            assert logging.getLogger(logger_name).level == logging.WARNING
        assert logging.getLogger("py.warnings").level == logging.ERROR

    def test_stdlib_records_reach_loguru(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO")
        logging.getLogger("httpx").warning("HTTP/1.1 429 Too Many Requests")

        main_log = (tmp_path / "logs" / "villain-timeline.log").read_text(encoding="utf-8")
        assert "429 Too Many Requests" in main_log


class TestGetLoggingStatus:
    """Test logging status reporting."""

    def test_get_status_interactive_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        Path("logs").mkdir()

        with patch("villain_timeline.utils.logging.config.detect_logging_mode", return_value=LoggingMode.INTERACTIVE):
            status = get_logging_status()

        assert status["mode"] == LoggingMode.INTERACTIVE
        assert status["log_directory"] == str((tmp_path / "logs").absolute())
        assert status["log_files"]["main"] == str(Path("logs") / "villain-timeline.log")
        assert status["log_files"]["errors"] == str(Path("logs") / "errors.log")
        assert "httpx" in status["third_party_suppressed"]

    def test_get_status_production_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        with patch("villain_timeline.utils.logging.config.detect_logging_mode", return_value=LoggingMode.PRODUCTION):
            status = get_logging_status()

        assert status["mode"] == LoggingMode.PRODUCTION
        assert status["log_directory"] is None
        assert status["log_files"] == {"main": None, "json": None, "errors": None}
