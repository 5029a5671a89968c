from __future__ import annotations

import json
import logging

import pytest

from conftest import FakeDynamoClient, make_pages
from partiql_relay.observability import logging as relay_logging
from partiql_relay.observability.context import request_id_var
from partiql_relay.services.query_relay import QueryRelay


@pytest.fixture
def fresh_logging(monkeypatch):
    """Let configure_logging run again, then put the root logger back."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    monkeypatch.setattr(relay_logging, "_CONFIGURED", False)
    yield
    for h in root.handlers:
        if h not in saved_handlers:
            h.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def _json_lines(path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def test_log_file_receives_json_relay_events(tmp_path, fresh_logging):
    log_file = tmp_path / "logs" / "app.log"
    relay_logging.configure_logging(level="INFO", log_file=str(log_file))

    relay = QueryRelay(client=FakeDynamoClient(make_pages(2)), log=relay_logging.get_logger("query_relay"))
    token = request_id_var.set("rid-file")
    try:
        relay.run("SELECT * FROM Orders", 10)
    finally:
        request_id_var.reset(token)

    lines = _json_lines(log_file)
    [started] = [ln for ln in lines if ln.get("event") == "query_started"]
    assert started["statement"] == "SELECT * FROM Orders"
    assert started["max_pages"] == 10
    assert started["level"] == "info"
    assert started["logger"] == "query_relay"
    assert started["request_id"] == "rid-file"
    assert "timestamp" in started

    [completed] = [ln for ln in lines if ln.get("event") == "query_completed"]
    assert completed["items"] == 2

    # Below the configured level.
    assert not [ln for ln in lines if ln.get("event") == "query_page_fetched"]


def test_stdlib_records_are_rendered_as_json_too(tmp_path, fresh_logging):
    log_file = tmp_path / "app.log"
    relay_logging.configure_logging(level="DEBUG", log_file=str(log_file))

    logging.getLogger("uvicorn.error").info("server up")

    [line] = [ln for ln in _json_lines(log_file) if ln.get("event") == "server up"]
    assert line["logger"] == "uvicorn.error"
    assert line["level"] == "info"


def test_configure_logging_without_file_only_logs_to_stdout(fresh_logging):
    relay_logging.configure_logging(level="INFO")

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert not isinstance(handlers[0], logging.FileHandler)
