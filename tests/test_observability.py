import json
import logging
import sys

from buildconfig_demo.observability import JSONFormatter, setup_logging


def make_record(**extra):
    record = logging.LogRecord("buildconfig_demo.main", logging.ERROR, __file__, 1, "boom %s", ("now",), None)
    record.__dict__.update(extra)
    return record


def test_json_formatter_fields():
    line = JSONFormatter().format(make_record(method="GET", path="/boom"))
    data = json.loads(line)
    assert data["level"] == "ERROR"
    assert data["logger"] == "buildconfig_demo.main"
    assert data["message"] == "boom now"
    assert data["method"] == "GET"
    assert data["path"] == "/boom"
    assert "signal" not in data


def test_json_formatter_exception():
    try:
        raise RuntimeError("kaboom")
    except RuntimeError:
        record = make_record()
        record.exc_info = sys.exc_info()
    data = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: kaboom" in data["exception"]


def test_setup_logging_replaces_its_own_handler():
    root = logging.getLogger()
    level = root.level
    try:
        first = setup_logging("DEBUG", "json")
        second = setup_logging("INFO", "text")
        assert first not in root.handlers
        assert second in root.handlers
        assert root.level == logging.INFO
        assert not isinstance(second.formatter, JSONFormatter)
    finally:
        root.removeHandler(second)
        root.setLevel(level)
