"""HTTP client option handling.

Options are plain dicts that end up as keyword arguments of the search
backend's HTTP client (``headers``, ``proxy``, ``timeout``, ``verify``).
"""

from __future__ import annotations

from typing import Any, Mapping

import httpx

from ddgtool.errors import TransportError


def merge_options(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Shallow-merge option mappings, later layers winning on key collision.

    Precedence is the argument order, e.g. ``merge_options(defaults, config, per_call)``.
    ``None`` layers are skipped. Nested dicts are replaced, not merged.
    """

    merged: dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def build_proxy(url: str) -> httpx.Proxy:
    """Parse and validate a proxy URL."""

    try:
        return httpx.Proxy(url)
    except (ValueError, TypeError, httpx.InvalidURL) as e:
        raise TransportError(f"invalid proxy url: {e}") from e


def install_proxy(http_options: dict[str, Any], proxy_url: str) -> dict[str, Any]:
    """Route every request made with ``http_options`` through ``proxy_url``."""

    build_proxy(proxy_url)
    http_options["proxy"] = proxy_url
    return http_options
