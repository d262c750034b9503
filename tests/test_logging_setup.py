import json
import logging

from activity_timer.logging_setup import JsonFormatter


def test_json_formatter_includes_prefixed_extras():
    record = logging.LogRecord("activity_timer.test", logging.WARNING, __file__, 1, "stop failed: %s", ("boom",), None)
    record._json_operation = "stop"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "stop failed: boom"
    assert payload["level"] == "WARNING"
    assert payload["operation"] == "stop"
    assert payload["ts"].endswith("Z")
