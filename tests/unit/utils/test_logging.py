"""Unit tests for logging utilities."""

import logging

import pytest

from mef2bids.utils.logging import LogLevel, configure_logger, message


class TestLogLevel:
    """Test conversion of verbosity values to log levels."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (True, LogLevel.DEBUG),
            (False, LogLevel.INFO),
            ("warning", LogLevel.WARNING),
            ("not-a-level", LogLevel.INFO),
            (logging.ERROR, LogLevel.ERROR),
            (35, LogLevel.WARNING),
            (1, LogLevel.DEBUG),
        ],
    )
    def test_from_value(self, value, expected):
        assert LogLevel.from_value(value) == expected

    def test_environment_variable(self, monkeypatch):
        monkeypatch.setenv("MEF2BIDS_LOGGING_LEVEL", "debug")

        assert LogLevel.from_value(None) == LogLevel.DEBUG

    def test_environment_default(self, monkeypatch):
        monkeypatch.delenv("MEF2BIDS_LOGGING_LEVEL", raising=False)

        assert LogLevel.from_value(None) == LogLevel.INFO


class TestMessage:
    """Test the message() helper."""

    def test_levels(self, log_records):
        message("header", "Generating BIDS amplifier metadata")
        message("warning", "check the ordering")
        message("debug", "details")

        assert [(r["level"].name, r["message"]) for r in log_records] == [
            ("HEADER", "Generating BIDS amplifier metadata"),
            ("WARNING", "check the ordering"),
            ("DEBUG", "details"),
        ]


class TestConfigureLogger:
    """Test sink configuration."""

    def test_log_file(self, tmp_path):
        log_dir = tmp_path / "logs"

        level = configure_logger("info", log_dir=log_dir)
        try:
            message("info", "written to file")
            log_files = list(log_dir.glob("mef2bids_*.log"))
            contents = log_files[0].read_text(encoding="utf-8")
        finally:
            configure_logger()

        assert level == LogLevel.INFO
        assert len(log_files) == 1
        assert "written to file" in contents
