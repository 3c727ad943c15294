"""Tools exposed to agents."""

from __future__ import annotations

from ddgtool.tools.base import SearchToolOutput, Tool, ToolOutput
from ddgtool.tools.duckduckgo import (
    DuckDuckGoSearchTool,
    DuckDuckGoSearchToolOptions,
    DuckDuckGoSearchToolOutput,
    DuckDuckGoSearchToolRunOptions,
)
from ddgtool.tools.registry import ToolRegistry, get_registry, register_tool

__all__ = [
    "Tool",
    "ToolOutput",
    "SearchToolOutput",
    "DuckDuckGoSearchTool",
    "DuckDuckGoSearchToolOptions",
    "DuckDuckGoSearchToolOutput",
    "DuckDuckGoSearchToolRunOptions",
    "ToolRegistry",
    "get_registry",
    "register_tool",
]
