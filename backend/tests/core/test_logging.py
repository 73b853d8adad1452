"""
Tests for core/logging module

Formatters, correlation context variables, redaction and LogTimer.
"""

import json
import logging
from unittest.mock import MagicMock

import pytest

from creal.core.logging import (
    DevelopmentFormatter,
    LoggerAdapter,
    LogTimer,
    StructuredFormatter,
    clear_context,
    get_logger,
    operation_id_var,
    request_id_var,
    set_operation_id,
    set_request_id,
    setup_logging,
)


def make_record(msg="Test message", level=logging.INFO, **extra):
    record = logging.LogRecord(
        name="test.module",
        level=level,
        pathname="/path/to/file.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def reset_context():
    clear_context()
    yield
    clear_context()


class TestStructuredFormatter:
    """Test suite for StructuredFormatter"""

    def test_format_basic_log(self):
        parsed = json.loads(StructuredFormatter().format(make_record()))

        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Test message"
        assert parsed["logger"] == "test.module"
        assert "timestamp" in parsed

    def test_extra_fields_are_nested(self):
        parsed = json.loads(StructuredFormatter().format(make_record(key="https://x", removed=3)))

        assert parsed["extra"]["key"] == "https://x"
        assert parsed["extra"]["removed"] == 3

    def test_sensitive_extra_is_redacted(self):
        parsed = json.loads(StructuredFormatter().format(make_record(api_key="AIza-secret")))

        assert parsed["extra"]["api_key"] == "***REDACTED***"

    def test_correlation_ids_included(self):
        set_request_id("req-1")
        set_operation_id("models/veo/operations/op-9")

        parsed = json.loads(StructuredFormatter().format(make_record()))

        assert parsed["request_id"] == "req-1"
        assert parsed["operation_id"] == "models/veo/operations/op-9"

    def test_format_with_exception(self):
        try:
            raise ValueError("Test exception")
        except ValueError:
            import sys
            exc_info = sys.exc_info()
        record = make_record(level=logging.ERROR)
        record.exc_info = exc_info

        parsed = json.loads(StructuredFormatter().format(record))

        assert parsed["exception"]["type"] == "ValueError"
        assert parsed["exception"]["message"] == "Test exception"


class TestDevelopmentFormatter:
    def test_format_contains_message_and_context(self):
        set_request_id("abcdef1234567890")

        result = DevelopmentFormatter().format(make_record("Purged expired analyses"))

        assert "Purged expired analyses" in result
        assert "req:abcdef12" in result


class TestLoggerAdapter:
    def test_process_merges_context(self):
        adapter = LoggerAdapter(MagicMock(), extra={"component": "cache_store"})
        set_operation_id("op-1")

        msg, kwargs = adapter.process("Test message", {"extra": {"key": "k"}})

        assert msg == "Test message"
        assert kwargs["extra"]["component"] == "cache_store"
        assert kwargs["extra"]["key"] == "k"
        assert kwargs["extra"]["operation_id"] == "op-1"

    def test_get_logger_returns_adapter(self):
        logger = get_logger("creal.test", component="x")

        assert isinstance(logger, LoggerAdapter)
        assert logger.extra == {"component": "x"}


class TestContext:
    def test_clear_context(self):
        set_request_id("r")
        set_operation_id("o")

        clear_context()

        assert request_id_var.get() is None
        assert operation_id_var.get() is None


class TestSetupLogging:
    def test_setup_logging_level_and_json(self):
        setup_logging(level="DEBUG", use_json=True)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_setup_logging_file(self, tmp_path):
        log_file = tmp_path / "logs" / "creal.jsonl"

        setup_logging(level="INFO", log_file=log_file)

        assert log_file.parent.exists()
        setup_logging()


class TestLogTimer:
    def test_logs_start_and_completion(self):
        logger = MagicMock()

        with LogTimer(logger, "video synthesis"):
            pass

        messages = [call.args[1] for call in logger.log.call_args_list]
        assert messages == ["Starting: video synthesis", "Completed: video synthesis"]

    def test_logs_failure_and_reraises(self):
        logger = MagicMock()

        with pytest.raises(RuntimeError):
            with LogTimer(logger, "video synthesis"):
                raise RuntimeError("boom")

        logger.warning.assert_called_once()
        assert logger.warning.call_args.kwargs["extra"]["error_type"] == "RuntimeError"
