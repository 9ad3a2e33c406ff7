# tests/unit/logging/test_logger.py
"""Tests for logging/logger.py: formatters and handler setup."""

from __future__ import annotations

import json
import logging
import sys

from rangefetch.logging.context import request_context, set_page_context
from rangefetch.logging.logger import JsonFormatter, TextFormatter, setup_logging


def _record(msg: str, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=level, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )


class TestJsonFormatter:
    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record("Hello")))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        with request_context("req1", "newtonsoft.json"):
            parsed = json.loads(JsonFormatter().format(_record("test msg")))
        assert parsed["context"]["package_id"] == "newtonsoft.json"

    def test_format_with_exception(self):
        try:
            raise ValueError("bad page")
        except ValueError:
            record = _record("failed", logging.ERROR)
            record.exc_info = sys.exc_info()
        parsed = json.loads(JsonFormatter().format(record))
        assert "ValueError: bad page" in parsed["exception"]


class TestTextFormatter:
    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_format_with_page(self):
        with request_context("req1", "pkg"):
            set_page_context("1.0.0-2.0.0")
            try:
                output = TextFormatter().format(_record("fetched"))
            finally:
                set_page_context(None)
        assert "[pkg]" in output
        assert "(1.0.0-2.0.0)" in output

    def test_format_appends_traceback(self):
        try:
            raise RuntimeError("socket closed")
        except RuntimeError:
            record = _record("page failed", logging.ERROR)
            record.exc_info = sys.exc_info()
        output = TextFormatter().format(record)
        first, _, rest = output.partition("\n")
        assert first.endswith("- page failed")
        assert "RuntimeError: socket closed" in rest


class TestSetupLogging:
    def test_setup_json(self):
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger("rangefetch")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_setup_text_is_idempotent(self):
        setup_logging(level="INFO", log_format="text")
        setup_logging(level="INFO", log_format="text")
        root = logging.getLogger("rangefetch")
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_setup_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "rangefetch.log"
        setup_logging(level="INFO", log_format="text", log_file=str(log_file))
        root = logging.getLogger("rangefetch")
        assert len(root.handlers) == 2
        root.info("written")
        for handler in root.handlers:
            handler.flush()
        assert "written" in log_file.read_text(encoding="utf-8")
        root.handlers[1].close()
        root.handlers.clear()

    def test_quiets_httpx(self):
        setup_logging()
        assert logging.getLogger("httpx").level == logging.WARNING
