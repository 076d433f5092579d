"""
Time MCP Server

Exposes the time tools via Model Context Protocol using FastMCP.

Usage:
    # Run with HTTP transport (default)
    time-mcp

    # Run with custom port
    time-mcp --port 8001

    # Run with STDIO transport (for MCP clients that spawn the server)
    time-mcp --stdio

Environment Variables:
    MCP_PORT           - Server port (default: 4001)
    MCP_HOST           - Server host (default: 0.0.0.0)
    TIME_MCP_TIMEZONE  - Default timezone (default: host zone)
    LOG_LEVEL          - Log level (default: INFO)
    LOG_FORMAT         - "json" or "human" (default: auto)
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from time_mcp.config import SERVER_NAME, SERVER_VERSION, ServerConfig
from time_mcp.observability import configure_logging
from time_mcp.tools import register_all_tools

logger = logging.getLogger(__name__)


def create_server(config: ServerConfig | None = None) -> FastMCP:
    """Build a FastMCP server with every time tool registered."""
    config = config or ServerConfig.load()
    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)

    tools = register_all_tools(mcp, config=config)
    logger.info("Registered %d tools: %s", len(tools), tools)
    logger.info("Default timezone: %s", config.default_timezone)

    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint for container orchestration."""
        return PlainTextResponse("OK")

    @mcp.custom_route("/", methods=["GET"])
    async def index(request: Request) -> PlainTextResponse:
        """Landing page for browser visits."""
        return PlainTextResponse("Welcome to the Time MCP Server")

    return mcp


def _redirect_rich_console_to_stderr() -> None:
    """Keep the FastMCP banner off stdout, which belongs to JSON-RPC in STDIO mode."""
    import rich.console

    original_init = rich.console.Console.__init__

    def patched_init(self, *args, **kwargs):
        kwargs["file"] = sys.stderr
        original_init(self, *args, **kwargs)

    rich.console.Console.__init__ = patched_init


def build_parser(config: ServerConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Time MCP Server")
    parser.add_argument(
        "--port",
        type=int,
        default=config.port,
        help=f"HTTP server port (default: {config.port})",
    )
    parser.add_argument(
        "--host",
        default=config.host,
        help=f"HTTP server host (default: {config.host})",
    )
    parser.add_argument(
        "--stdio",
        action="store_true",
        help="Use STDIO transport instead of HTTP",
    )
    parser.add_argument(
        "--timezone",
        default=None,
        help="Default timezone for tools (overrides TIME_MCP_TIMEZONE)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the MCP server."""
    try:
        config = ServerConfig.load()
    except ValueError as e:
        sys.stderr.write(f"Error starting Time MCP server: {e}\n")
        sys.exit(1)

    args = build_parser(config).parse_args(argv)
    if args.timezone:
        config = replace(config, default_timezone=args.timezone)

    # STDIO mode: only JSON-RPC messages go to stdout
    configure_logging(level=config.log_level, format=config.log_format, stream=sys.stderr)
    if args.stdio:
        _redirect_rich_console_to_stderr()

    try:
        logger.info("Starting Time MCP server...")
        mcp = create_server(config)
        if args.stdio:
            mcp.run(transport="stdio")
        else:
            logger.info("Starting HTTP server on %s:%s", args.host, args.port)
            mcp.run(transport="http", host=args.host, port=args.port)
    except Exception as e:
        logger.error("Error starting Time MCP server: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
