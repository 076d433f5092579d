"""
Exceptions raised by the time tools.

Every exception here is recovered by the dispatcher into a failure
envelope; none of them escape to the MCP transport.
"""

from __future__ import annotations


class TimeToolError(Exception):
    """Base class for all time tool failures."""

    pass


class UnknownToolError(TimeToolError):
    """Raised when a call names a tool outside the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidArgumentsError(TimeToolError):
    """Raised when the argument mapping does not match the tool's schema."""

    def __init__(self, name: str, details: str = ""):
        self.name = name
        self.details = details
        super().__init__(f"Invalid arguments for tool: [{name}]")


class TimeCalculationError(TimeToolError):
    """Raised when the date/time machinery rejects an input."""

    def __init__(self, operation: str, cause: str):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Failed to {operation}: {cause}")


class TimeConversionError(TimeCalculationError):
    """Raised when a timezone conversion fails. Names both zones."""

    def __init__(self, source_timezone: str, target_timezone: str, cause: str):
        self.source_timezone = source_timezone
        self.target_timezone = target_timezone
        super().__init__(
            f"convert time from sourceTimezone '{source_timezone}' "
            f"to targetTimezone '{target_timezone}'",
            cause,
        )
