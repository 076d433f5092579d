"""Shared fixtures for the time tool tests."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest

from time_mcp.observability import clear_trace_context
from time_mcp.tools.time_tool import ToolDispatcher

# Sunday 23 March 2025, 12:30 UTC
FIXED_NOW = datetime(2025, 3, 23, 12, 30, tzinfo=UTC)

CONFIG_ENV_VARS = ["TIME_MCP_TIMEZONE", "MCP_HOST", "MCP_PORT", "LOG_LEVEL", "LOG_FORMAT", "TZ"]


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def dispatcher() -> ToolDispatcher:
    """Dispatcher pinned to UTC with a frozen clock."""
    return ToolDispatcher(default_timezone="UTC", clock=lambda: FIXED_NOW)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Hide the developer's env vars and ~/.time-mcp config from the test."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("time_mcp.config.TIME_MCP_CONFIG_FILE", tmp_path / "no-config.json")
    return monkeypatch


@pytest.fixture(autouse=True)
def _reset_logging_and_context():
    """Undo configure_logging() and trace context changes after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    clear_trace_context()
