"""Structured Logging — JSON formatter output and setup_logging wiring."""

import json
import sys
import logging

import pytest

from budget_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "budget_api.api.routes.envelopes", logging.INFO, __file__, 1,
        "Balance transferred", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "budget_api.api.routes.envelopes"
    assert log["message"] == "Balance transferred"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras_only():
    record = _record(from_envelope_id=1, to_envelope_id=2, amount=50.0, unrelated="x")
    log = json.loads(JSONFormatter().format(record))
    assert (log["from_envelope_id"], log["to_envelope_id"], log["amount"]) == (1, 2, 50.0)
    assert "unrelated" not in log
    assert "envelope_id" not in log


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord(
            "x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info(),
        )
    log = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: boom" in log["exception"]


@pytest.fixture
def restore_root_logger():
    level = logging.root.level
    handlers = list(logging.root.handlers)
    yield
    logging.root.handlers = handlers
    logging.root.setLevel(level)


@pytest.mark.parametrize("fmt, formatter_type", [
    ("json", JSONFormatter),
    ("text", logging.Formatter),
])
def test_setup_logging_installs_handler(restore_root_logger, fmt, formatter_type):
    handler = setup_logging("debug", fmt)
    assert handler in logging.root.handlers
    assert isinstance(handler.formatter, formatter_type)
    assert logging.root.level == logging.DEBUG
