"""Tests for the DuckDuckGo backend adapter."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from duckduckgo_search.exceptions import (
    DuckDuckGoSearchException,
    RatelimitException,
    TimeoutException,
)

from ddgtool.errors import BackendError, TransportError
from ddgtool.models.search import SafeSearch
from ddgtool.tools import web_search
from ddgtool.tools.web_search import DuckDuckGoBackend


class FakeDDGS:
    """Stand-in for ``duckduckgo_search.DDGS`` recording its arguments."""

    instances: list[FakeDDGS] = []
    hits: Any = []
    error: Exception | None = None

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs
        self.text_calls: list[tuple[str, dict[str, Any]]] = []
        FakeDDGS.instances.append(self)

    def __enter__(self) -> FakeDDGS:
        return self

    def __exit__(self, *exc: object) -> None:
        return None

    def text(self, keywords: str, **kwargs: Any) -> Any:
        self.text_calls.append((keywords, kwargs))
        if FakeDDGS.error is not None:
            raise FakeDDGS.error
        return FakeDDGS.hits


@pytest.fixture(autouse=True)
def fake_ddgs(monkeypatch: pytest.MonkeyPatch) -> type[FakeDDGS]:
    FakeDDGS.instances = []
    FakeDDGS.hits = []
    FakeDDGS.error = None
    monkeypatch.setattr(web_search, "DDGS", FakeDDGS)
    return FakeDDGS


def _hits(n: int) -> list[dict[str, str]]:
    return [{"title": f"T{i}", "body": f"B{i}", "href": f"https://h/{i}"} for i in range(n)]


def _search(search_options: dict[str, Any], transport_options: dict[str, Any] | None = None) -> dict[str, Any]:
    return asyncio.run(DuckDuckGoBackend().search("python", search_options, transport_options or {}))


def test_maps_hits_to_raw_results(fake_ddgs: type[FakeDDGS]) -> None:
    """It should rename body/href to description/url."""

    fake_ddgs.hits = _hits(2)
    response = _search({"max_results": 5})

    assert response == {
        "results": [
            {"title": "T0", "description": "B0", "url": "https://h/0"},
            {"title": "T1", "description": "B1", "url": "https://h/1"},
        ]
    }


def test_offset_requests_extra_hits_and_skips_them(fake_ddgs: type[FakeDDGS]) -> None:
    """It should fetch offset + max_results hits and drop the first offset."""

    fake_ddgs.hits = _hits(12)
    response = _search({"offset": 8, "max_results": 4})

    _, kwargs = fake_ddgs.instances[0].text_calls[0]
    assert kwargs["max_results"] == 12
    assert [r["url"] for r in response["results"]] == [f"https://h/{i}" for i in range(8, 12)]


def test_forwards_only_set_search_options(fake_ddgs: type[FakeDDGS]) -> None:
    """It should map option names and leave unset ones to DDGS defaults."""

    _search({"safe_search": SafeSearch.STRICT, "region": "de-de", "max_results": 3})
    _, kwargs = fake_ddgs.instances[0].text_calls[0]
    assert kwargs == {"safesearch": "on", "region": "de-de", "max_results": 3}

    _search({"safe_search": "off", "time_limit": "w", "backend": "html", "max_results": 3})
    _, kwargs = fake_ddgs.instances[1].text_calls[0]
    assert kwargs == {"safesearch": "off", "timelimit": "w", "backend": "html", "max_results": 3}


def test_transport_options_reach_client(fake_ddgs: type[FakeDDGS]) -> None:
    """It should build the DDGS client from headers, user agent, proxy and timeout."""

    _search(
        {},
        {
            "headers": {"accept": "*/*"},
            "user_agent": "UA/2",
            "proxy": "socks5://127.0.0.1:9150",
            "timeout": 3,
            "verify": False,
        },
    )

    assert fake_ddgs.instances[0].kwargs == {
        "headers": {"accept": "*/*", "user-agent": "UA/2"},
        "timeout": 3,
        "proxy": "socks5://127.0.0.1:9150",
        "verify": False,
    }


def test_default_timeout_and_no_proxy(fake_ddgs: type[FakeDDGS]) -> None:
    """It should fall back to the default timeout and omit an empty proxy."""

    _search({})
    assert fake_ddgs.instances[0].kwargs == {"headers": {}, "timeout": 10.0}


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (RatelimitException("202 Ratelimit"), BackendError),
        (TimeoutException("timed out"), TransportError),
        (DuckDuckGoSearchException("connection refused"), TransportError),
        (OSError("network unreachable"), TransportError),
    ],
)
def test_maps_library_errors(fake_ddgs: type[FakeDDGS], error: Exception, expected: type[Exception]) -> None:
    """It should translate duckduckgo_search failures into typed tool errors."""

    fake_ddgs.error = error
    with pytest.raises(expected):
        _search({})


def test_none_means_no_results(fake_ddgs: type[FakeDDGS]) -> None:
    """It should treat a None hit list as an empty result set."""

    fake_ddgs.hits = None
    assert _search({}) == {"results": []}


@pytest.mark.parametrize("hits", ["garbage", [1, 2]])
def test_malformed_hits_are_backend_errors(fake_ddgs: type[FakeDDGS], hits: Any) -> None:
    """It should reject hit lists that are not lists of mappings."""

    fake_ddgs.hits = hits
    with pytest.raises(BackendError):
        _search({})
