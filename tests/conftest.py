"""In-memory stand-ins for Playwright browser, context and page handles."""
from __future__ import annotations

from typing import Any, Callable, Optional
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from remote_tabs.state import SessionState
from remote_tabs.tools.registry import ToolRegistry, create_default_registry


class FakePage:
    def __init__(self, context: FakeContext, url: str = "about:blank", title: str = "") -> None:
        self.context = context
        self.url = url
        self._title = title
        self._closed = False
        self.front_count = 0
        self.viewport: Optional[dict[str, int]] = None
        self.last_wait_until: Optional[str] = None
        self.goto_error: Optional[Exception] = None
        self.close_error: Optional[Exception] = None
        self.close_closes_anyway = False

    async def goto(self, url: str, wait_until: Optional[str] = None, **kwargs: Any) -> None:
        if self.goto_error:
            raise self.goto_error
        self.url = url
        self._title = f"Title of {url}"
        self.last_wait_until = wait_until

    async def title(self) -> str:
        if self._closed:
            raise RuntimeError("Target page, context or browser has been closed")
        return self._title

    async def bring_to_front(self) -> None:
        if self._closed:
            raise RuntimeError("Target page, context or browser has been closed")
        self.front_count += 1

    async def close(self) -> None:
        if self.close_error:
            if self.close_closes_anyway:
                self._mark_closed()
            raise self.close_error
        self._mark_closed()

    async def set_viewport_size(self, size: dict[str, int]) -> None:
        self.viewport = size

    def is_closed(self) -> bool:
        return self._closed

    def _mark_closed(self) -> None:
        self._closed = True
        if self in self.context.pages:
            self.context.pages.remove(self)


class FakeContext:
    def __init__(self) -> None:
        self.pages: list[FakePage] = []
        self.handlers: dict[str, list[Callable]] = {}
        self.new_page_error: Optional[Exception] = None

    def on(self, event: str, handler: Callable) -> None:
        self.handlers.setdefault(event, []).append(handler)

    async def new_page(self) -> FakePage:
        if self.new_page_error:
            raise self.new_page_error
        page = FakePage(self)
        self.pages.append(page)
        return page

    def add_page(self, url: str, title: str = "") -> FakePage:
        page = FakePage(self, url=url, title=title)
        self.pages.append(page)
        return page


class FakeBrowser:
    def __init__(self, contexts: Optional[list[FakeContext]] = None) -> None:
        self.contexts = contexts if contexts is not None else [FakeContext()]
        self.connected = True
        self.handlers: dict[str, list[Callable]] = {}
        self.closed = False

    def is_connected(self) -> bool:
        return self.connected

    def on(self, event: str, handler: Callable) -> None:
        self.handlers.setdefault(event, []).append(handler)

    async def new_context(self, **kwargs: Any) -> FakeContext:
        context = FakeContext()
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.closed = True
        self.connected = False

    def drop_connection(self) -> None:
        """Simulate the remote process going away."""
        self.connected = False
        for handler in self.handlers.get("disconnected", []):
            handler(self)


class FakeBackend:
    """Backend that hands out a prepared FakeBrowser."""

    def __init__(self, browser: FakeBrowser) -> None:
        self._browser = browser
        self.active_page: Optional[FakePage] = None
        self.launch_count = 0
        self.launch_error: Optional[Exception] = None
        self.disconnect_handlers: list[Callable] = []
        self.observed: list[FakeContext] = []

    @property
    def browser(self) -> FakeBrowser:
        return self._browser

    @property
    def is_connected(self) -> bool:
        return self._browser.is_connected()

    def on_disconnect(self, handler: Callable) -> None:
        self.disconnect_handlers.append(handler)
        self._browser.on("disconnected", handler)

    def observe_context(self, context: FakeContext) -> None:
        if not any(c is context for c in self.observed):
            self.observed.append(context)

    async def launch(self) -> FakeBrowser:
        if self.launch_error:
            raise self.launch_error
        self.launch_count += 1
        self._browser.connected = True
        return self._browser

    async def ensure_running(self) -> FakeBrowser:
        if self.launch_count and self.is_connected:
            return self._browser
        return await self.launch()

    async def new_page(self) -> FakePage:
        return await self._browser.contexts[0].new_page()

    def pages(self) -> list[FakePage]:
        return [p for c in self._browser.contexts for p in c.pages]

    async def close(self) -> None:
        await self._browser.close()


@pytest.fixture
def fake_browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture
def backend(fake_browser: FakeBrowser) -> FakeBackend:
    return FakeBackend(fake_browser)


@pytest.fixture
def state() -> SessionState:
    return SessionState()


@pytest.fixture
def registry(backend: FakeBackend, state: SessionState) -> ToolRegistry:
    return create_default_registry(backend, state)


@pytest.fixture
def playwright_mock(fake_browser: FakeBrowser):
    """Patch async_playwright so connect_over_cdp returns ``fake_browser``."""
    pw = MagicMock()
    pw.chromium.connect_over_cdp = AsyncMock(return_value=fake_browser)
    pw.stop = AsyncMock()
    starter = MagicMock()
    starter.start = AsyncMock(return_value=pw)
    with patch("remote_tabs.browser.remote.async_playwright", return_value=starter):
        yield pw
