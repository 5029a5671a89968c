from __future__ import annotations

import pytest

from partiql_relay.services.query_relay import coerce_page_bound
from partiql_relay.settings import settings


@pytest.mark.parametrize(
    "raw,expected",
    [
        (5, 5),
        ("5", 5),
        (" 12 ", 12),
        ("7 pages", 7),
        ("+3", 3),
        (5.9, 5),
        ("5.9", 5),
        (0, 0),
        ("0", 0),
        (-2, 0),
        ("-2", 0),
    ],
)
def test_numeric_values_are_parsed(raw, expected):
    assert coerce_page_bound(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   ", "abc", "pages: 5", True, False, [], {}, float("nan")])
def test_absent_or_non_numeric_values_use_default(raw):
    assert coerce_page_bound(raw) == settings.default_max_pages


def test_default_follows_settings(monkeypatch):
    monkeypatch.setattr(settings, "default_max_pages", 4)

    assert coerce_page_bound(None) == 4
    assert coerce_page_bound("x") == 4
    assert coerce_page_bound("2") == 2


def test_explicit_default_wins_over_settings(monkeypatch):
    monkeypatch.setattr(settings, "default_max_pages", 4)

    assert coerce_page_bound(None, default=3) == 3
    assert coerce_page_bound("x", default=3) == 3
    assert coerce_page_bound("4", default=3) == 4
