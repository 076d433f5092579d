"""Logging setup and trace context for the time tools server."""

from .logging import (
    HumanReadableFormatter,
    StructuredFormatter,
    clear_trace_context,
    configure_logging,
    get_trace_context,
    set_trace_context,
)

__all__ = [
    "configure_logging",
    "set_trace_context",
    "get_trace_context",
    "clear_trace_context",
    "StructuredFormatter",
    "HumanReadableFormatter",
]
