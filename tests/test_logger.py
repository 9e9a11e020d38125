"""Tests for logger.py -- setup_logging() and JsonFormatter.

Strategy: Mock logging.basicConfig to verify setup_logging passes correct args,
since pytest's log capture plugin interferes with actual basicConfig calls.
"""

import json
import logging
import sys
from unittest.mock import patch

import pytest

from template_sync.config_schema import LoggingConfig
from template_sync.logger import (
    JsonFormatter,
    setup_logging,
    setup_logging_from_config,
)


@pytest.fixture(autouse=True)
def no_level_env(monkeypatch):
    monkeypatch.delenv("TEMPLATE_SYNC_LOG_LEVEL", raising=False)


class TestSetupLogging:
    """Tests for setup_logging()."""

    @patch("template_sync.logger.logging.basicConfig")
    def test_logs_to_stderr(self, mock_basic):
        setup_logging()

        mock_basic.assert_called_once()
        handlers = mock_basic.call_args[1]["handlers"]
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].stream is sys.stderr

    @patch("template_sync.logger.logging.basicConfig")
    def test_default_level_is_info(self, mock_basic):
        setup_logging()
        assert mock_basic.call_args[1]["level"] == logging.INFO

    @patch("template_sync.logger.logging.basicConfig")
    def test_log_file_adds_handler(self, mock_basic, tmp_path):
        log_file = str(tmp_path / "sync.log")
        setup_logging(log_file=log_file)

        handlers = mock_basic.call_args[1]["handlers"]
        assert len(handlers) == 2
        assert isinstance(handlers[1], logging.FileHandler)
        assert handlers[1].baseFilename == log_file
        handlers[1].close()

    @patch("template_sync.logger.logging.basicConfig")
    def test_config_level_used(self, mock_basic):
        setup_logging(level="warning")
        assert mock_basic.call_args[1]["level"] == logging.WARNING

    @patch("template_sync.logger.logging.basicConfig")
    def test_env_beats_config_level(self, mock_basic, monkeypatch):
        monkeypatch.setenv("TEMPLATE_SYNC_LOG_LEVEL", "ERROR")
        setup_logging(level="WARNING")
        assert mock_basic.call_args[1]["level"] == logging.ERROR

    @patch("template_sync.logger.logging.basicConfig")
    def test_debug_beats_env(self, mock_basic, monkeypatch):
        monkeypatch.setenv("TEMPLATE_SYNC_LOG_LEVEL", "ERROR")
        setup_logging(debug=True)
        assert mock_basic.call_args[1]["level"] == logging.DEBUG

    @patch("template_sync.logger.logging.basicConfig")
    def test_unknown_level_falls_back_to_info(self, mock_basic, monkeypatch):
        monkeypatch.setenv("TEMPLATE_SYNC_LOG_LEVEL", "CHATTY")
        setup_logging()
        assert mock_basic.call_args[1]["level"] == logging.INFO

    @patch("template_sync.logger.logging.basicConfig")
    def test_json_format(self, mock_basic):
        setup_logging(debug_format="json")
        handlers = mock_basic.call_args[1]["handlers"]
        assert isinstance(handlers[0].formatter, JsonFormatter)

    @patch("template_sync.logger.logging.basicConfig")
    def test_charset_normalizer_silenced(self, mock_basic):
        setup_logging()
        assert (
            logging.getLogger("charset_normalizer").level == logging.WARNING
        )


class TestJsonFormatter:
    def _record(self, **kwargs):
        return logging.LogRecord(
            name="template_sync.sync.presenter",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="Review document for %s failed",
            args=("a.md",),
            exc_info=kwargs.get("exc_info"),
        )

    def test_fields(self):
        entry = json.loads(JsonFormatter().format(self._record()))
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "template_sync.sync.presenter"
        assert entry["msg"] == "Review document for a.md failed"
        assert "ts" in entry
        assert "exc" not in entry

    def test_exception_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            exc_info = sys.exc_info()
        entry = json.loads(
            JsonFormatter().format(self._record(exc_info=exc_info))
        )
        assert "RuntimeError: boom" in entry["exc"]


class TestSetupLoggingFromConfig:
    @patch("template_sync.logger.logging.basicConfig")
    def test_level_and_file_from_config(self, mock_basic, tmp_path):
        log_file = str(tmp_path / "sync.log")
        setup_logging_from_config(LoggingConfig(level="ERROR", file=log_file))

        kwargs = mock_basic.call_args[1]
        assert kwargs["level"] == logging.ERROR
        assert kwargs["handlers"][1].baseFilename == log_file
        kwargs["handlers"][1].close()

    @patch("template_sync.logger.logging.basicConfig")
    def test_debug_flag_wins(self, mock_basic):
        setup_logging_from_config(LoggingConfig(level="ERROR"), debug=True)
        assert mock_basic.call_args[1]["level"] == logging.DEBUG
