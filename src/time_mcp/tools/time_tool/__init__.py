"""
Time Tool - current time, relative time, timestamps, calendar facts and
timezone conversion.
"""

from .dispatcher import TOOL_CATALOG, ToolDispatcher
from .schemas import ToolName, ToolResponse
from .time_tool import register_tools

__all__ = ["register_tools", "ToolDispatcher", "ToolName", "ToolResponse", "TOOL_CATALOG"]
