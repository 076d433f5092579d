"""
Time MCP - date/time tools for AI agents over the Model Context Protocol.

Tools: current_time, relative_time, days_in_month, get_timestamp,
convert_time, get_week_year.

Usage:
    from fastmcp import FastMCP
    from time_mcp.tools import register_all_tools

    mcp = FastMCP("my-server")
    register_all_tools(mcp)
"""

__version__ = "0.0.1"

# No fastmcp needed for these
from .config import ServerConfig
from .errors import (
    InvalidArgumentsError,
    TimeCalculationError,
    TimeConversionError,
    TimeToolError,
    UnknownToolError,
)


def __getattr__(name: str):
    """Lazy import for objects that require fastmcp."""
    if name == "register_all_tools":
        from .tools import register_all_tools

        return register_all_tools
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",
    # Configuration
    "ServerConfig",
    # Errors
    "TimeToolError",
    "UnknownToolError",
    "InvalidArgumentsError",
    "TimeCalculationError",
    "TimeConversionError",
    # MCP registration (lazy loaded)
    "register_all_tools",
]
