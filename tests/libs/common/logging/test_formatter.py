"""Tests for JSON log formatter.

Tests verify that logs are formatted with:
- Required schema fields (timestamp, level, service, trace_id, message)
- Optional context fields
- Exception information and source location
"""

import json
import logging
import sys
from datetime import UTC, datetime

import pytest

from libs.common.logging.formatter import JSONFormatter


def _record(msg: str = "Test", level: int = logging.INFO, args: tuple = (), exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="/path/to/file.py",
        lineno=42,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )


class TestJSONFormatter:
    @pytest.fixture()
    def formatter(self) -> JSONFormatter:
        return JSONFormatter(service_name="weather-orchestrator")

    def test_basic_log_format(self, formatter: JSONFormatter) -> None:
        record = _record("Weather resolved")
        record.trace_id = "4bf92f3577b34da6a3ce929d0e0e4736"

        log_dict = json.loads(formatter.format(record))

        assert log_dict["level"] == "INFO"
        assert log_dict["service"] == "weather-orchestrator"
        assert log_dict["trace_id"] == "4bf92f3577b34da6a3ce929d0e0e4736"
        assert log_dict["message"] == "Weather resolved"

    def test_timestamp_is_utc_iso8601(self, formatter: JSONFormatter) -> None:
        log_dict = json.loads(formatter.format(_record()))

        timestamp = log_dict["timestamp"]
        assert timestamp.endswith("Z")
        assert datetime.fromisoformat(timestamp.replace("Z", "+00:00")).tzinfo == UTC

    def test_known_timestamp(self, formatter: JSONFormatter) -> None:
        assert formatter._format_timestamp(1697896200.0) == "2023-10-21T13:50:00.000Z"

    def test_context_inclusion(self, formatter: JSONFormatter) -> None:
        record = _record()
        record.context = {"cep": "01001000", "city": "São Paulo"}

        log_dict = json.loads(formatter.format(record))

        assert log_dict["context"] == {"cep": "01001000", "city": "São Paulo"}

    def test_non_ascii_is_not_escaped(self, formatter: JSONFormatter) -> None:
        record = _record()
        record.context = {"city": "São Paulo"}

        assert "São Paulo" in formatter.format(record)

    def test_no_context_when_disabled(self) -> None:
        formatter = JSONFormatter(service_name="test", include_context=False)
        record = _record()
        record.context = {"cep": "01001000"}

        assert "context" not in json.loads(formatter.format(record))

    def test_missing_trace_id(self, formatter: JSONFormatter) -> None:
        assert json.loads(formatter.format(_record()))["trace_id"] is None

    def test_exception_logging(self, formatter: JSONFormatter) -> None:
        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        log_dict = json.loads(formatter.format(_record("Error occurred", logging.ERROR, exc_info=exc_info)))

        assert log_dict["exception"]["type"] == "ValueError"
        assert log_dict["exception"]["message"] == "Test error"
        assert "ValueError" in log_dict["exception"]["traceback"]

    def test_source_location(self, formatter: JSONFormatter) -> None:
        record = _record()
        record.funcName = "lookup"

        log_dict = json.loads(formatter.format(record))

        assert log_dict["source"] == {"file": "/path/to/file.py", "line": 42, "function": "lookup"}

    def test_extra_fields_as_context(self, formatter: JSONFormatter) -> None:
        record = _record()
        record.orchestrator_url = "http://localhost:8081/weather"

        log_dict = json.loads(formatter.format(record))

        assert log_dict["context"] == {"orchestrator_url": "http://localhost:8081/weather"}

    def test_message_with_args(self, formatter: JSONFormatter) -> None:
        record = _record("CEP %s resolved to %s", args=("01001000", "São Paulo"))

        assert json.loads(formatter.format(record))["message"] == "CEP 01001000 resolved to São Paulo"
