"""Tool registry.

Agents look tools up by name, list their schemas, and run them.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel

from ddgtool.errors import ToolError
from ddgtool.logging import get_logger
from ddgtool.tools.base import Tool, ToolOutput

logger = get_logger(__name__)


class ToolRegistry:
    """Registry for managing tools."""

    def __init__(self) -> None:
        """Initialize tool registry."""
        self._tools: dict[str, Tool[Any, Any, Any]] = {}

    def register(self, tool: Tool[Any, Any, Any]) -> None:
        """Register a tool.

        Args:
            tool: Tool instance to register. Replaces any tool with the same name.
        """
        self._tools[tool.name] = tool
        logger.info("Tool registered", extra={"tool_name": tool.name})

    def get(self, name: str) -> Tool[Any, Any, Any] | None:
        """Get a tool by name.

        Args:
            name: Tool name.

        Returns:
            Tool instance or None if not found.
        """
        return self._tools.get(name)

    def list_tools(self) -> list[dict[str, Any]]:
        """List all registered tools with their schemas.

        Returns:
            List of tool metadata dictionaries.
        """
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "schema": tool.get_schema(),
            }
            for tool in self._tools.values()
        ]

    async def run(
        self,
        tool_name: str,
        arguments: Mapping[str, Any] | BaseModel,
        options: Any = None,
    ) -> ToolOutput:
        """Run a registered tool.

        Raises:
            ToolError: if no tool is registered under ``tool_name``, or
                whatever the tool itself raises.
        """
        tool = self.get(tool_name)
        if tool is None:
            raise ToolError(
                f"Tool '{tool_name}' not found. Available tools: {', '.join(self._tools.keys())}"
            )
        return await tool.run(arguments, options)


_global_registry = ToolRegistry()


def get_registry() -> ToolRegistry:
    """Get the global tool registry."""
    return _global_registry


def register_tool(tool: Tool[Any, Any, Any]) -> None:
    """Register a tool in the global registry."""
    _global_registry.register(tool)
