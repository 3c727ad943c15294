"""Rate-limited DuckDuckGo search tool for agent frameworks."""

from __future__ import annotations

from ddgtool.errors import BackendError, ToolError, TransportError, ValidationError
from ddgtool.models.search import SafeSearch, SearchResult, ThrottleOptions
from ddgtool.tools.duckduckgo import (
    DuckDuckGoSearchTool,
    DuckDuckGoSearchToolOptions,
    DuckDuckGoSearchToolOutput,
    DuckDuckGoSearchToolRunOptions,
)

__version__ = "0.1.0"

__all__ = [
    "BackendError",
    "DuckDuckGoSearchTool",
    "DuckDuckGoSearchToolOptions",
    "DuckDuckGoSearchToolOutput",
    "DuckDuckGoSearchToolRunOptions",
    "SafeSearch",
    "SearchResult",
    "ThrottleOptions",
    "ToolError",
    "TransportError",
    "ValidationError",
]
