"""
Tool registry and dispatcher.

Each call validates its arguments, makes sure the browser is attached,
resolves the focused tab and runs the handler, all under the session
lock so focus changes from one call are seen whole by the next.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from pydantic import ValidationError

from ..browser.tabs import list_pages, page_index
from ..state import SessionState, get_session_state
from .types import ToolContext, ToolResult, ToolSpec

if TYPE_CHECKING:
    from playwright.async_api import Browser

    from ..browser.base import BrowserBackend

logger = logging.getLogger(__name__)
tool_logger = logging.getLogger("remote_tabs.tools")


class ToolRegistry:
    """Registry for tool handlers with automatic browser attach."""

    def __init__(
        self,
        backend: BrowserBackend,
        state: Optional[SessionState] = None,
    ) -> None:
        self._backend = backend
        self._state = state or get_session_state()
        self._tools: dict[str, ToolSpec] = {}
        backend.on_disconnect(self._handle_disconnect)

    @property
    def state(self) -> SessionState:
        return self._state

    def register(self, spec: ToolSpec) -> None:
        """Register a tool."""
        self._tools[spec.name] = spec

    def register_many(self, specs: list[ToolSpec]) -> None:
        """Register multiple tools at once."""
        for spec in specs:
            self.register(spec)

    def get(self, name: str) -> Optional[ToolSpec]:
        return self._tools.get(name)

    def has(self, name: str) -> bool:
        return name in self._tools

    @property
    def tools(self) -> list[ToolSpec]:
        return list(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    async def dispatch(self, name: str, arguments: Optional[dict[str, Any]]) -> ToolResult:
        """
        Dispatch a tool call to its handler.

        Args:
            name: Registered tool name
            arguments: Raw call arguments

        Returns:
            ToolResult from the handler, or an error result for unknown
            tools and invalid arguments

        Raises:
            DiscoveryError: If the browser endpoint cannot be discovered
            AttachError: If the browser cannot be attached
        """
        spec = self._tools.get(name)
        if spec is None:
            return ToolResult.error(f"Unknown tool: {name}")

        try:
            args = spec.input_model.model_validate(arguments or {})
        except ValidationError as e:
            return ToolResult.error(f"Invalid arguments for {name}: {e}")

        async with self._state.lock:
            ctx = await self._build_context()
            logger.debug(f"Calling {name} on tab [{ctx.tab_index}]")
            return await spec.handler(ctx, args)

    async def _build_context(self) -> ToolContext:
        browser = await self._current_browser()
        for context in browser.contexts:
            self._backend.observe_context(context)
        pages = list_pages(browser)

        page = self._state.page
        if page_index(pages, page) < 0:
            if page is not None:
                # Focused tab went away outside this session
                self._state.set(page=None)
            page = self._backend.active_page
            if page_index(pages, page) < 0:
                page = pages[-1] if pages else None

        return ToolContext(
            browser=browser,
            page=page,
            tab_index=page_index(pages, page),
            state=self._state,
            logger=tool_logger,
            on_new_context=self._backend.observe_context,
        )

    async def _current_browser(self) -> Browser:
        browser = self._state.browser
        if browser is not None and browser.is_connected():
            return browser

        browser = await self._backend.ensure_running()
        if browser is not self._state.browser:
            self._state.set(browser=browser, page=None)
        return browser

    def _handle_disconnect(self, browser: Browser) -> None:
        if self._state.browser is browser:
            self._state.reset()


def create_default_registry(
    backend: BrowserBackend,
    state: Optional[SessionState] = None,
) -> ToolRegistry:
    """Create a registry with the tab tools."""
    from .tabs import TAB_TOOLS

    registry = ToolRegistry(backend, state)
    registry.register_many(TAB_TOOLS)
    logger.info(f"Registered {len(registry)} tools")
    return registry
