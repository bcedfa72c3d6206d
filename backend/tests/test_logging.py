"""
Tests du logging JSON (formatter + setup).
"""
import json
import logging

import pytest

from app.core.logging import JsonFormatter, RequestIdFilter, setup_logging
from app.core.request_id import MAX_REQUEST_ID_LENGTH, ensure_request_id, sanitize_request_id, set_request_id


def _record(msg="hello", **extra):
    record = logging.LogRecord("app.test", logging.ERROR, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJsonFormatter:
    def test_formats_one_json_line(self):
        record = _record(field_errors={"DATABASE_URL": ["Field required"]}, status_code=503)
        RequestIdFilter().filter(record)

        payload = json.loads(JsonFormatter().format(record))

        assert payload["level"] == "ERROR"
        assert payload["logger"] == "app.test"
        assert payload["msg"] == "hello"
        assert payload["request_id"] == "-"
        assert payload["status_code"] == 503
        assert payload["field_errors"] == {"DATABASE_URL": ["Field required"]}

    def test_includes_current_request_id(self):
        ensure_request_id("req-42")
        try:
            record = _record()
            RequestIdFilter().filter(record)
        finally:
            set_request_id(None)

        assert json.loads(JsonFormatter().format(record))["request_id"] == "req-42"


class TestSetupLogging:
    def test_replaces_handlers(self, restore_root_logger):
        setup_logging("debug")
        setup_logging("warning")

        root = restore_root_logger
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.WARNING
        assert logging.getLogger("uvicorn.access").handlers == root.handlers


class TestRequestId:
    def test_control_characters_are_removed(self):
        assert sanitize_request_id("req-1\r\nX-Injected: yes") == "req-1X-Injected:yes"

    def test_length_is_bounded(self):
        assert len(sanitize_request_id("a" * 500)) == MAX_REQUEST_ID_LENGTH

    def test_unusable_id_is_replaced(self):
        try:
            rid = ensure_request_id(" \t\n")
        finally:
            set_request_id(None)

        assert len(rid) == 32
