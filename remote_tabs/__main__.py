"""Entry point for running the remote-tabs MCP server.

Usage:
    python -m remote_tabs
"""
import sys

from remote_tabs.server import main

if __name__ == "__main__":
    sys.exit(main())
