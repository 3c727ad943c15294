"""Tests for HTML stripping."""

from __future__ import annotations

import pytest

from ddgtool.tools import sanitize
from ddgtool.tools.sanitize import normalize_result, strip_html


def test_strip_html_removes_tags() -> None:
    """It should remove tags and keep inner text."""

    assert strip_html("<b>Foo</b>").result == "Foo"


def test_strip_html_decodes_entities() -> None:
    """It should decode HTML entities."""

    assert strip_html("Tom &amp; Jerry&#39;s").result == "Tom & Jerry's"


def test_strip_html_collapses_whitespace() -> None:
    """It should collapse whitespace left behind by removed markup."""

    assert strip_html("<p>one</p>\n<p>two   three</p>").result == "one two three"


@pytest.mark.parametrize("text", ["<b>unclosed", "<<>>", "</i>stray close", "<div <span>x"])
def test_strip_html_never_raises_on_malformed_markup(text: str) -> None:
    """It should return best-effort plain text for malformed markup."""

    result = strip_html(text).result
    assert isinstance(result, str)
    assert "<b>" not in result


def test_strip_html_empty_values() -> None:
    """It should map None and empty strings to empty text."""

    assert strip_html(None).result == ""
    assert strip_html("").result == ""


def test_strip_html_falls_back_when_parser_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    """It should fall back to a regex strip if the parser raises."""

    def _boom(*args: object, **kwargs: object) -> None:
        raise RuntimeError("parser exploded")

    monkeypatch.setattr(sanitize, "BeautifulSoup", _boom)
    assert strip_html("<b>Foo</b> &amp; bar").result == "Foo & bar"


def test_normalize_result_keeps_url() -> None:
    """It should strip title and description but pass the URL through."""

    result = normalize_result(
        {
            "title": "<b>Py</b>thon",
            "description": "<em>fast</em> &lt;enough&gt;",
            "url": "https://example.com/?a=1&b=<2>",
        }
    )

    assert result.title == "Python"
    assert result.description == "fast <enough>"
    assert result.url == "https://example.com/?a=1&b=<2>"


@pytest.mark.parametrize(("value", "expected"), [(123, "123"), (4.5, "4.5"), (["<b>x</b>"], "['x']")])
def test_strip_html_stringifies_non_text(value: object, expected: str) -> None:
    """It should stringify non-string values instead of raising."""

    assert strip_html(value).result == expected


def test_normalize_result_with_numeric_fields() -> None:
    """It should normalize results whose fields are not strings."""

    result = normalize_result({"title": 42, "description": 0, "url": "https://n.example"})

    assert result.title == "42"
    assert result.description == "0"
