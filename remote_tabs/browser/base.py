"""Capability interface shared by browser backends."""
from typing import Callable, Optional, Protocol

from playwright.async_api import Browser, BrowserContext, Page


class BrowserBackend(Protocol):
    """What the tool layer needs from a browser, however it was obtained.

    A remote backend attaches to a running process; a local one would
    launch it. Both hand out the same Playwright handles.
    """

    @property
    def browser(self) -> Browser: ...

    @property
    def is_connected(self) -> bool: ...

    @property
    def active_page(self) -> Optional[Page]: ...

    def on_disconnect(self, handler: Callable[[Browser], None]) -> None: ...

    def observe_context(self, context: BrowserContext) -> None: ...

    async def launch(self) -> Browser: ...

    async def ensure_running(self) -> Browser: ...

    async def new_page(self) -> Page: ...

    def pages(self) -> list[Page]: ...

    async def close(self) -> None: ...
