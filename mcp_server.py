#!/usr/bin/env python3
"""
Time MCP Server launcher.

Usage:
    # Run with HTTP transport (default, for Docker)
    python mcp_server.py

    # Run with custom port
    python mcp_server.py --port 8001

    # Run with STDIO transport (for local testing)
    python mcp_server.py --stdio

See time_mcp.server for the environment variables it reads.
"""

from time_mcp.server import main

if __name__ == "__main__":
    main()
