"""Tests for structured logging configuration."""

import json
import logging
import sys
from unittest.mock import patch

from roster.app.core.context import set_current_request_id
from roster.app.core.logging import (
    ContextFilter,
    JSONFormatter,
    get_log_context,
    get_logger,
    get_logging_config,
    setup_logging,
)


def _record(msg: str = "Test message", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestJSONFormatter:
    """Test JSON formatter for structured logging."""

    def test_basic_json_format(self):
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test"
        assert data["message"] == "Test message"
        assert "timestamp" in data
        assert data["source"]["file"] == "test.py"
        assert data["source"]["line"] == 1

    def test_json_format_with_context(self):
        record = _record("Student created")
        record.request_id = "req-1"
        record.student_id = "3f2a" * 8
        record.operation = "create"
        record.collection = "classes"

        data = json.loads(JSONFormatter().format(record))

        assert data["request_id"] == "req-1"
        assert data["student_id"] == "3f2a" * 8
        assert data["operation"] == "create"
        assert data["collection"] == "classes"
        assert "extra" not in data

    def test_json_format_with_extra_fields(self):
        record = _record()
        record.completed = ["students", "grade_levels"]

        data = json.loads(JSONFormatter().format(record))

        assert data["extra"]["completed"] == ["students", "grade_levels"]

    def test_json_format_with_exception(self):
        record = _record("Failed", logging.ERROR)
        try:
            raise ValueError("boom")
        except ValueError:
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        assert any("ValueError: boom" in line for line in data["exception"])


class TestContextFilter:
    """Test context filter for adding default fields."""

    def test_adds_default_fields(self):
        record = _record()

        assert ContextFilter().filter(record) is True
        assert record.student_id is None
        assert record.operation is None
        assert record.collection is None

    def test_request_id_from_async_context(self):
        set_current_request_id("ctx-42")
        try:
            record = _record()
            ContextFilter().filter(record)
        finally:
            set_current_request_id(None)

        assert record.request_id == "ctx-42"

    def test_preserves_existing_values(self):
        set_current_request_id("ctx-42")
        try:
            record = _record()
            record.request_id = "explicit"
            record.operation = "delete"
            ContextFilter().filter(record)
        finally:
            set_current_request_id(None)

        assert record.request_id == "explicit"
        assert record.operation == "delete"


class TestGetLoggingConfig:
    """Test logging configuration generation."""

    def test_default_text_format(self):
        with patch("roster.app.core.logging.settings") as mock_settings:
            mock_settings.log_format = "text"
            mock_settings.log_level = "INFO"

            config = get_logging_config()

        assert "json" not in config["formatters"]
        assert config["handlers"]["console"]["formatter"] == "standard"

    def test_structured_format(self):
        with patch("roster.app.core.logging.settings") as mock_settings:
            mock_settings.log_format = "structured"
            mock_settings.log_level = "DEBUG"

            config = get_logging_config()

        assert config["handlers"]["console"]["formatter"] == "structured"
        assert config["handlers"]["console"]["level"] == "DEBUG"

    def test_json_format(self):
        with patch("roster.app.core.logging.settings") as mock_settings:
            mock_settings.log_format = "json"
            mock_settings.log_level = "WARNING"

            config = get_logging_config()

        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["loggers"]["roster"]["level"] == "WARNING"

    def test_context_filter_added(self):
        config = get_logging_config()

        assert "context" in config["handlers"]["console"]["filters"]
        assert "context" in config["handlers"]["error_console"]["filters"]


def test_get_logger_default_name():
    assert get_logger().name == "roster"


class TestGetLogContext:
    """Test get_log_context helper function."""

    def test_context_filters_none(self):
        context = get_log_context(student_id="abc", operation=None, collection="classes")

        assert context == {"student_id": "abc", "collection": "classes"}

    def test_context_with_extra(self):
        context = get_log_context(operation="delete", deleted={"students": 1})

        assert context["operation"] == "delete"
        assert context["deleted"] == {"students": 1}


def test_json_logging_output(capsys):
    with patch("roster.app.core.logging.settings") as mock_settings:
        mock_settings.log_format = "json"
        mock_settings.log_level = "INFO"
        setup_logging()

    try:
        get_logger("roster.test").info(
            "Student updated",
            extra=get_log_context(student_id="abc", operation="update"),
        )
        output = capsys.readouterr().out.strip().splitlines()[-1]
    finally:
        setup_logging()

    data = json.loads(output)
    assert data["message"] == "Student updated"
    assert data["student_id"] == "abc"
    assert data["operation"] == "update"
