"""
Time MCP Tools - FastMCP tool registration.

Usage:
    from fastmcp import FastMCP
    from time_mcp.tools import register_all_tools

    mcp = FastMCP("my-server")
    register_all_tools(mcp)
"""

from __future__ import annotations

from fastmcp import FastMCP

from time_mcp.config import ServerConfig

from .time_tool import register_tools as register_time


def register_all_tools(mcp: FastMCP, config: ServerConfig | None = None) -> list[str]:
    """
    Register all tools with a FastMCP server.

    Args:
        mcp: FastMCP server instance
        config: Server configuration (defaults to ServerConfig.load())

    Returns:
        List of registered tool names
    """
    if config is None:
        config = ServerConfig.load()

    return register_time(mcp, config=config)


__all__ = ["register_all_tools"]
