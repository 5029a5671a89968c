from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `backend/` is on sys.path so `import partiql_relay.*` works in tests.
BACKEND_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_DIR))


class FakeLog:
    """Records structlog-style calls as (level, event, fields)."""

    def __init__(self):
        self.events: list[tuple[str, str, dict]] = []

    def _record(self, level: str, event: str, **kwargs):
        self.events.append((level, event, kwargs))

    def debug(self, event: str, **kwargs):
        self._record("debug", event, **kwargs)

    def info(self, event: str, **kwargs):
        self._record("info", event, **kwargs)

    def warning(self, event: str, **kwargs):
        self._record("warning", event, **kwargs)

    def error(self, event: str, **kwargs):
        self._record("error", event, **kwargs)

    def exception(self, event: str, **kwargs):
        self._record("exception", event, **kwargs)

    def named(self, event: str) -> list[dict]:
        return [fields for _lvl, ev, fields in self.events if ev == event]


class FakeDynamoClient:
    """
    Serves canned ExecuteStatement pages in order and records every call.
    A page entry that is an exception is raised instead of returned.
    """

    def __init__(self, pages):
        self._pages = list(pages)
        self.calls: list[dict] = []

    def execute_statement(self, **kwargs):
        self.calls.append(kwargs)
        page = self._pages[len(self.calls) - 1]
        if isinstance(page, Exception):
            raise page
        return page


def make_pages(*sizes: int, token_on_last: bool = False) -> list[dict]:
    """
    Build ExecuteStatement responses with `sizes[i]` items on page i. Every page
    but the last carries a NextToken.
    """
    pages: list[dict] = []
    n = 0
    for idx, size in enumerate(sizes):
        items = []
        for _ in range(size):
            n += 1
            items.append({"id": {"S": f"o-{n}"}, "seq": {"N": str(n)}})
        page: dict = {"Items": items}
        if idx < len(sizes) - 1 or token_on_last:
            page["NextToken"] = f"tok-{idx + 1}"
        pages.append(page)
    return pages


@pytest.fixture
def fake_log() -> FakeLog:
    return FakeLog()
