import json
import logging
import sys

from quizgrader.core.observability import JsonLogFormatter


def make_record(message: str) -> logging.LogRecord:
    return logging.LogRecord(
        name="quizgrader.core.middleware",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=None,
        exc_info=None,
    )


def test_json_message_stays_valid_json():
    inner = json.dumps({"event": "request_completed", "path": '/questions/"q1"'})

    line = JsonLogFormatter().format(make_record(inner))

    entry = json.loads(line)
    assert entry["level"] == "INFO"
    assert entry["logger"] == "quizgrader.core.middleware"
    assert json.loads(entry["message"])["event"] == "request_completed"


def test_exception_is_included():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = make_record("failed")
        record.exc_info = sys.exc_info()

    entry = json.loads(JsonLogFormatter().format(record))
    assert "RuntimeError: boom" in entry["exception"]
