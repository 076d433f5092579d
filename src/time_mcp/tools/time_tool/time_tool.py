"""
Time Tools - date/time utilities for FastMCP.

Registers the six tools of the time catalog. Each tool publishes the JSON
schema of its argument model and hands the raw argument mapping to a
shared ToolDispatcher, so malformed arguments come back as a readable
failure instead of a protocol error.
"""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import PrivateAttr

from time_mcp.config import ServerConfig

from .dispatcher import TOOL_CATALOG, ToolDispatcher, ToolSpec


class TimeTool(Tool):
    """An MCP tool backed by the dispatcher."""

    _dispatcher: ToolDispatcher = PrivateAttr()

    @classmethod
    def from_spec(cls, spec: ToolSpec, dispatcher: ToolDispatcher) -> TimeTool:
        tool = cls(
            name=spec.name.value,
            description=spec.description,
            parameters=spec.arguments.model_json_schema(),
        )
        tool._dispatcher = dispatcher
        return tool

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        response = self._dispatcher.dispatch(self.name, arguments)
        return ToolResult(
            content=[TextContent(type="text", text=response.text)],
            structured_content=response.model_dump(),
        )


def register_tools(
    mcp: FastMCP,
    config: ServerConfig | None = None,
    dispatcher: ToolDispatcher | None = None,
) -> list[str]:
    """Register time tools with the MCP server.

    Args:
        mcp: Server to register on
        config: Supplies the default timezone when no dispatcher is given
        dispatcher: Pre-built dispatcher (tests inject one with a fixed clock)

    Returns:
        Names of the registered tools
    """
    if dispatcher is None:
        default_timezone = config.default_timezone if config is not None else None
        dispatcher = ToolDispatcher(default_timezone=default_timezone)

    names = []
    for spec in TOOL_CATALOG.values():
        mcp.add_tool(TimeTool.from_spec(spec, dispatcher))
        names.append(spec.name.value)
    return names
