# tests/utils/test_logging.py
"""
Tests for logging configuration.

Test Coverage:
- Correlation ID filter
- JSON formatter output and extra fields
- setup_logging level/format handling
"""

import json
import logging
import sys
from decimal import Decimal

import pytest

from folio.utils.context import clear_correlation_id, set_correlation_id
from folio.utils.logging import (
    NO_CORRELATION_ID,
    CorrelationIdFilter,
    JsonFormatter,
    _get_log_level,
    get_logger,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="folio.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestCorrelationIdFilter:

    def test_adds_placeholder_without_id(self):
        clear_correlation_id()
        record = _record()

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == NO_CORRELATION_ID

    def test_adds_current_id(self):
        set_correlation_id("refresh-prices-abc")
        try:
            record = _record()
            CorrelationIdFilter().filter(record)
        finally:
            clear_correlation_id()

        assert record.correlation_id == "refresh-prices-abc"


class TestJsonFormatter:

    def test_basic_fields(self):
        record = _record("No exchange rate for CHF/TWD", correlation_id="c-1")

        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "folio.test"
        assert entry["correlation_id"] == "c-1"
        assert entry["message"] == "No exchange rate for CHF/TWD"
        assert "extra" not in entry

    def test_extra_fields(self):
        record = _record(from_currency="CHF", to_currency="TWD")

        entry = json.loads(JsonFormatter().format(record))

        assert entry["extra"] == {"from_currency": "CHF", "to_currency": "TWD"}

    def test_unserializable_extra_is_stringified(self):
        record = _record(rate=Decimal("30.31"))

        entry = json.loads(JsonFormatter().format(record))

        assert entry["extra"]["rate"] == "30.31"

    def test_exception_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()

        entry = json.loads(JsonFormatter().format(record))

        assert "ValueError: boom" in entry["exception"]


class TestSetupLogging:

    def test_json_format(self, restore_root_logger, capsys):
        setup_logging(level="INFO", log_format="json")

        get_logger("folio.test").warning("degraded")

        lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert lines[-1]["message"] == "degraded"
        assert lines[-1]["correlation_id"] == NO_CORRELATION_ID

    def test_text_format_includes_correlation_id(self, restore_root_logger, capsys):
        setup_logging(level="DEBUG", log_format="text")
        set_correlation_id("job-7")
        try:
            get_logger("folio.test").info("refreshed")
        finally:
            clear_correlation_id()

        out = capsys.readouterr().out
        assert "job-7" in out
        assert "refreshed" in out
        assert restore_root_logger.level == logging.DEBUG

    def test_noisy_loggers_suppressed(self, restore_root_logger):
        setup_logging(level="DEBUG", log_format="text")

        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_invalid_level(self, restore_root_logger):
        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logging(level="LOUD")

    @pytest.mark.parametrize("name,expected", [
        ("debug", logging.DEBUG),
        (" INFO ", logging.INFO),
        ("warn", logging.WARNING),
    ])
    def test_level_names(self, name, expected):
        assert _get_log_level(name) == expected
