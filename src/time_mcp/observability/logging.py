"""
Structured logging with per-call trace context.

Key Features:
- Standard logger.info() calls pick up the current tool call automatically
- ContextVar-based propagation: safe across threads and async tasks
- Dual output modes: JSON for production, human-readable for development

Flow:
    ToolDispatcher.dispatch() → sets tool + call_id in the context
        ↓ (automatic propagation via ContextVar)
    Calculations / formatting → logger.debug("...") → gets the context
"""

import json
import logging
import os
import re
import sys
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any, TextIO

# Context variable for trace propagation
trace_context: ContextVar[dict[str, Any] | None] = ContextVar("trace_context", default=None)

# ANSI escape code pattern (matches \033[...m or \x1b[...m)
ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m|\033\[[0-9;]*m")


def strip_ansi_codes(text: str) -> str:
    """Remove ANSI escape codes from text for clean JSON logging."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Produces machine-parseable log entries with:
    - Standard fields (timestamp, level, logger, message)
    - Trace context (tool, call_id)
    - Custom fields from extra dict (event, latency_ms)
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        context = trace_context.get() or {}

        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": strip_ansi_codes(record.getMessage()),
        }

        log_entry.update(context)

        event = getattr(record, "event", None)
        if event is not None:
            log_entry["event"] = strip_ansi_codes(event) if isinstance(event, str) else event

        latency_ms = getattr(record, "latency_ms", None)
        if latency_ms is not None:
            log_entry["latency_ms"] = latency_ms

        if record.exc_info:
            exception_text = self.formatException(record.exc_info)
            log_entry["exception"] = strip_ansi_codes(exception_text)

        return json.dumps(log_entry)


class HumanReadableFormatter(logging.Formatter):
    """
    Human-readable formatter for development.

    Colorized level names with the current tool call as a prefix.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as human-readable string."""
        context = trace_context.get() or {}

        prefix_parts = []
        if context.get("tool"):
            prefix_parts.append(f"tool:{context['tool']}")
        if context.get("call_id"):
            prefix_parts.append(f"call:{context['call_id'][:8]}")
        context_prefix = f"[{' | '.join(prefix_parts)}] " if prefix_parts else ""

        color = self.COLORS.get(record.levelname, "") if self.use_colors else ""
        reset = self.RESET if self.use_colors else ""
        level = f"{record.levelname:<8}"

        event = ""
        record_event = getattr(record, "event", None)
        if record_event is not None:
            event = f" [{record_event}]"

        message = f"{color}[{level}]{reset} {context_prefix}{record.getMessage()}{event}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def configure_logging(
    level: str = "INFO",
    format: str = "auto",  # "json", "human", or "auto"
    stream: TextIO | None = None,
) -> None:
    """
    Configure logging for the server process.

    Call once at startup. In STDIO mode pass ``stream=sys.stderr`` so that
    stdout carries nothing but JSON-RPC.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format:
            - "json": Machine-parseable JSON (for production)
            - "human": Human-readable with colors (for development)
            - "auto": JSON if LOG_FORMAT=json or ENV=production, else human
        stream: Destination stream (defaults to stderr)
    """
    if format == "auto":
        log_format_env = os.getenv("LOG_FORMAT", "").lower()
        env = os.getenv("ENV", "development").lower()
        format = "json" if log_format_env == "json" or env == "production" else "human"

    stream = stream or sys.stderr
    if format == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = HumanReadableFormatter(use_colors=stream.isatty())

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())

    # Keep the MCP library quiet unless we are debugging
    if level.upper() != "DEBUG":
        logging.getLogger("mcp.server").setLevel(logging.WARNING)


def set_trace_context(**kwargs: Any) -> None:
    """
    Merge fields into the trace context of the current execution.

    Args:
        **kwargs: Context fields (tool, call_id, ...)
    """
    current = trace_context.get() or {}
    trace_context.set({**current, **kwargs})


def get_trace_context() -> dict:
    """
    Get current trace context.

    Returns:
        Copy of the context dict, empty if nothing was set.
    """
    context = trace_context.get() or {}
    return context.copy()


def clear_trace_context() -> None:
    """Clear trace context (between test runs or after a tool call)."""
    trace_context.set(None)
