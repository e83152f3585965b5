"""CLI entry point for the remote-tabs MCP server."""
import sys

from remote_tabs.server import main

if __name__ == "__main__":
    sys.exit(main())
