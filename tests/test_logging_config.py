import json
import logging

from fulfillment.logging_config import JSONFormatter, bind, get_logger


def _record(**extra):
    record = logging.LogRecord("fulfillment.test", logging.INFO, __file__, 1, "Webhook request received", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(_record()))
        assert data["level"] == "INFO"
        assert data["logger"] == "fulfillment.test"
        assert data["message"] == "Webhook request received"
        assert "context" not in data

    def test_context(self):
        data = json.loads(JSONFormatter().format(_record(context={"session_id": "S"})))
        assert data["context"] == {"session_id": "S"}


class TestLoggers:
    def test_namespace(self):
        assert get_logger("router").name == "fulfillment.router"

    def test_bind_merges_context(self):
        adapter = bind(get_logger("test"), session_id="S", intent=None)
        msg, kwargs = adapter.process("hello", {"context": {"intent": "welcome"}})
        assert msg == "hello"
        assert kwargs["extra"] == {"context": {"session_id": "S", "intent": "welcome"}}
