"""Shared test doubles."""

from __future__ import annotations

import asyncio
import time
from typing import Any, Mapping


class StubBackend:
    """Search backend that records calls and returns canned results."""

    def __init__(
        self,
        results: list[dict[str, Any]] | None = None,
        *,
        response: Any = None,
        error: Exception | None = None,
        delay_s: float = 0.0,
    ) -> None:
        self.results = results if results is not None else []
        self.response = response
        self.error = error
        self.delay_s = delay_s
        self.calls: list[dict[str, Any]] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def search(
        self,
        query: str,
        search_options: Mapping[str, Any],
        transport_options: Mapping[str, Any],
    ) -> Any:
        self.calls.append(
            {
                "query": query,
                "search_options": dict(search_options),
                "transport_options": dict(transport_options),
                "at": time.monotonic(),
            }
        )
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        return {"results": list(self.results)}


class StubHeaders:
    """Header provider with a fixed header set."""

    def __init__(self, headers: dict[str, str] | None = None) -> None:
        self.headers = headers or {"user-agent": "TestAgent/1.0", "accept": "*/*"}
        self.calls = 0

    def get_headers(self) -> dict[str, str]:
        self.calls += 1
        return dict(self.headers)


def make_results(n: int) -> list[dict[str, Any]]:
    return [
        {"title": f"Result {i}", "description": f"About {i}", "url": f"https://example.com/{i}"}
        for i in range(n)
    ]
