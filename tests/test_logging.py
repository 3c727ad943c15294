"""Tests for logging helpers."""

from __future__ import annotations

import logging

from ddgtool.logging import StructuredFormatter, _CallContextFilter, call_context, extra_fields


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("ddgtool.test", logging.INFO, __file__, 1, "Search ok", None, None)
    record.__dict__.update(extra)
    return record


def test_extra_fields_only_returns_user_fields() -> None:
    """It should ignore standard record attributes and call context."""

    record = _record(query_len=6, result_count=3)
    _CallContextFilter().filter(record)

    assert extra_fields(record) == {"query_len": 6, "result_count": 3}


def test_formatter_appends_sorted_fields() -> None:
    """It should render extra fields after the message as key=value."""

    formatter = StructuredFormatter(fmt="%(message)s")

    assert formatter.format(_record(result_count=3, latency_ms=12)) == (
        "Search ok | latency_ms=12 result_count=3"
    )
    assert formatter.format(_record()) == "Search ok"


def test_call_context_tags_records() -> None:
    """It should tag records with the bound call id and restore it afterwards."""

    context_filter = _CallContextFilter()
    with call_context(call_id="call_abc", tool="DuckDuckGo"):
        inside = _record()
        context_filter.filter(inside)
    outside = _record()
    context_filter.filter(outside)

    assert (inside.call_id, inside.tool) == ("call_abc", "DuckDuckGo")
    assert (outside.call_id, outside.tool) == ("-", "-")
