"""MCP server exposing the tab tools of a remote browser over stdio.

Usage:
    remote-tabs --ws-endpoint ws://127.0.0.1:9222/devtools/browser/<id>
    remote-tabs --cdp-endpoint http://10.0.0.5:9222/json/version
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import mcp.server.stdio
import mcp.types as types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions

from . import __version__
from .browser.remote import RemoteBrowser
from .core.config import Settings, ViewportConfig
from .core.errors import RemoteTabsError
from .core.logging import setup_logging
from .tools.registry import ToolRegistry, create_default_registry
from .tools.types import ToolResult, ToolSpec

logger = logging.getLogger(__name__)

SERVER_NAME = "remote-tabs"


def tool_definition(spec: ToolSpec) -> types.Tool:
    return types.Tool(
        name=spec.name,
        description=spec.description,
        inputSchema=spec.input_schema(),
        outputSchema=spec.output_schema(),
    )


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult.model_validate(result.to_dict())


class RemoteTabsServer:
    """Wires the tool registry to an MCP ``Server``."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.backend = RemoteBrowser(settings.browser)
        self.registry: ToolRegistry = create_default_registry(self.backend)
        self.server = Server(SERVER_NAME)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        @self.server.list_tools()
        async def handle_list_tools() -> list[types.Tool]:
            return [tool_definition(spec) for spec in self.registry.tools]

        @self.server.call_tool()
        async def handle_call_tool(
            name: str, arguments: Optional[dict[str, Any]]
        ) -> types.CallToolResult:
            return await self.call_tool(name, arguments)

    async def call_tool(self, name: str, arguments: Optional[dict[str, Any]]) -> types.CallToolResult:
        """Run one tool call; attach failures become error results."""
        try:
            result = await self.registry.dispatch(name, arguments)
        except RemoteTabsError as e:
            logger.error(f"{name}: browser unavailable: {e}")
            result = ToolResult.error(f"Browser unavailable: {e}")
        return to_call_tool_result(result)

    async def run(self) -> None:
        """Serve over stdio until the client disconnects."""
        try:
            async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    InitializationOptions(
                        server_name=SERVER_NAME,
                        server_version=__version__,
                        capabilities=self.server.get_capabilities(
                            notification_options=NotificationOptions(),
                            experimental_capabilities={},
                        ),
                    ),
                )
        finally:
            await self.backend.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Expose tabs of a running Chrome to MCP clients"
    )
    parser.add_argument(
        "--config", "-c",
        default="config/settings.yaml",
        help="Path to settings YAML file (skipped if missing)"
    )
    parser.add_argument(
        "--ws-endpoint",
        help="WebSocket debugger URL to attach to directly"
    )
    parser.add_argument(
        "--cdp-endpoint",
        help="Metadata URL used to discover the WebSocket debugger URL"
    )
    parser.add_argument("--width", type=int, help="Viewport width for new tabs")
    parser.add_argument("--height", type=int, help="Viewport height for new tabs")
    parser.add_argument(
        "--no-viewport",
        action="store_true",
        help="Leave tab sizes untouched"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Settings from YAML (if present) and environment, overridden by CLI flags."""
    config_path = Path(args.config)
    settings = Settings.from_yaml(config_path) if config_path.exists() else Settings()

    browser = settings.browser
    if args.ws_endpoint:
        browser.ws_endpoint = args.ws_endpoint
    if args.cdp_endpoint:
        browser.cdp_endpoint = args.cdp_endpoint
    if args.no_viewport:
        browser.viewport = None
    elif args.width or args.height:
        current = browser.viewport or ViewportConfig()
        browser.viewport = ViewportConfig(
            width=args.width or current.width,
            height=args.height or current.height,
        )
    if args.debug:
        settings.log_level = "DEBUG"
    return settings


def main(argv: Optional[list[str]] = None) -> int:
    """Run the MCP server."""
    args = build_parser().parse_args(argv)
    settings = load_settings(args)
    setup_logging(settings.log_level)

    logger.info(f"=== {SERVER_NAME} {__version__} starting ===")
    try:
        asyncio.run(RemoteTabsServer(settings).run())
    except KeyboardInterrupt:
        pass
    logger.info(f"=== {SERVER_NAME} stopped ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())
