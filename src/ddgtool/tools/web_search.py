"""Web search backend abstraction."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

import httpx
from duckduckgo_search import DDGS
from duckduckgo_search.exceptions import (
    DuckDuckGoSearchException,
    RatelimitException,
    TimeoutException,
)

from ddgtool.errors import BackendError, TransportError
from ddgtool.logging import get_logger
from ddgtool.models.search import SafeSearch

logger = get_logger(__name__)


class SearchBackend(Protocol):
    """Search backend interface."""

    async def search(
        self,
        query: str,
        search_options: Mapping[str, Any],
        transport_options: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Search the web.

        Returns:
            ``{"results": [{"title", "description", "url"}, ...]}``
        """


@dataclass(frozen=True)
class DuckDuckGoBackend:
    """DuckDuckGo search backend.

    Notes:
        - ``DDGS`` has no offset parameter, so ``offset + max_results`` hits are
          requested and the leading ``offset`` hits are dropped.
        - Only options that are set are forwarded, so ``DDGS`` keeps its own defaults.
    """

    source_name: str = "duckduckgo"
    default_max_results: int = 10
    default_timeout_s: float = 10.0

    async def search(
        self,
        query: str,
        search_options: Mapping[str, Any],
        transport_options: Mapping[str, Any],
    ) -> dict[str, Any]:
        return await asyncio.to_thread(
            self._search_sync, query, dict(search_options), dict(transport_options)
        )

    def _search_sync(
        self,
        query: str,
        search_options: dict[str, Any],
        transport_options: dict[str, Any],
    ) -> dict[str, Any]:
        offset = max(0, int(search_options.get("offset") or 0))
        max_results = int(search_options.get("max_results") or self.default_max_results)

        started = time.monotonic()
        try:
            with DDGS(**self._client_kwargs(transport_options)) as ddgs:
                raw = ddgs.text(query, **self._text_kwargs(search_options, offset + max_results))
        except RatelimitException as e:
            raise BackendError(f"{self.source_name} rate limited the request: {e}") from e
        except TimeoutException as e:
            raise TransportError(f"{self.source_name} request timed out: {e}") from e
        except DuckDuckGoSearchException as e:
            raise TransportError(f"{self.source_name} request failed: {e}") from e
        except (httpx.HTTPError, OSError) as e:
            raise TransportError(f"{self.source_name} request failed: {e}") from e

        if raw is None:
            raw = []
        if not isinstance(raw, list):
            raise BackendError(f"{self.source_name} response is not a result list")

        results: list[dict[str, Any]] = []
        for item in raw[offset:]:
            if not isinstance(item, Mapping):
                raise BackendError(f"{self.source_name} returned a malformed result item")
            results.append(
                {
                    "title": item.get("title") or "",
                    "description": item.get("body") or item.get("description") or "",
                    "url": item.get("href") or item.get("url") or "",
                }
            )

        logger.info(
            "DuckDuckGo search ok",
            extra={
                "provider": self.source_name,
                "query_len": len(query),
                "offset": offset,
                "max_results": max_results,
                "result_count": len(results),
                "latency_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return {"results": results}

    def _client_kwargs(self, transport_options: dict[str, Any]) -> dict[str, Any]:
        headers = dict(transport_options.get("headers") or {})
        user_agent = transport_options.get("user_agent")
        if user_agent:
            headers["user-agent"] = user_agent

        kwargs: dict[str, Any] = {
            "headers": headers,
            "timeout": transport_options.get("timeout", self.default_timeout_s),
        }
        if transport_options.get("proxy"):
            kwargs["proxy"] = transport_options["proxy"]
        if "verify" in transport_options:
            kwargs["verify"] = transport_options["verify"]
        return kwargs

    @staticmethod
    def _text_kwargs(search_options: dict[str, Any], max_results: int) -> dict[str, Any]:
        safe_search = search_options.get("safe_search") or SafeSearch.MODERATE
        kwargs: dict[str, Any] = {
            "safesearch": safe_search.value if isinstance(safe_search, SafeSearch) else str(safe_search),
            "max_results": max_results,
        }
        for option, ddgs_name in (("region", "region"), ("time_limit", "timelimit"), ("backend", "backend")):
            value = search_options.get(option)
            if value is not None:
                kwargs[ddgs_name] = value
        return kwargs
