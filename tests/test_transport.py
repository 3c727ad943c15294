"""Tests for option merging, proxies and header generation."""

from __future__ import annotations

import random

import pytest

from ddgtool.errors import TransportError
from ddgtool.tools.headers import DEFAULT_USER_AGENTS, BrowserHeaderProvider
from ddgtool.tools.transport import build_proxy, install_proxy, merge_options


def test_merge_options_later_layers_win() -> None:
    """It should apply layers left to right and skip None."""

    merged = merge_options({"a": 1, "b": 1}, None, {"b": 2, "c": {"x": 1}}, {"c": {"y": 2}})

    assert merged == {"a": 1, "b": 2, "c": {"y": 2}}


def test_merge_options_does_not_mutate_inputs() -> None:
    """It should return a new dict."""

    base = {"a": 1}
    merge_options(base, {"a": 2})

    assert base == {"a": 1}


@pytest.mark.parametrize("url", ["http://proxy:8080", "https://u:p@proxy:443", "socks5://127.0.0.1:9050"])
def test_build_proxy_accepts_supported_schemes(url: str) -> None:
    """It should accept http, https and socks5 proxies."""

    build_proxy(url)


def test_install_proxy_rejects_unknown_scheme() -> None:
    """It should raise TransportError for unsupported proxy schemes."""

    with pytest.raises(TransportError):
        install_proxy({}, "gopher://proxy:70")


def test_browser_headers_include_user_agent() -> None:
    """It should always emit a known user agent."""

    provider = BrowserHeaderProvider(rng=random.Random(7))
    headers = provider.get_headers()

    assert headers["user-agent"] in DEFAULT_USER_AGENTS
    assert headers["accept-language"].startswith("en-US")


def test_browser_headers_need_a_user_agent() -> None:
    """It should refuse an empty user agent pool."""

    with pytest.raises(ValueError):
        BrowserHeaderProvider(user_agents=())
