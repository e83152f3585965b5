"""Attach to an already-running Chrome over CDP."""
import logging
from typing import Callable, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from ..core.config import BrowserConfig, ViewportConfig
from ..core.errors import AttachError
from .endpoint import ConnectionTarget, resolve_endpoint
from .tabs import list_pages, open_page

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT = ViewportConfig()

DisconnectHandler = Callable[[Browser], None]


class RemoteBrowser:
    """Owns the connection to one remote browser process.

    The browser is never launched here and never killed on close; only
    the CDP connection is opened and dropped. A disconnect is reported to
    the registered handlers and the handle is forgotten, so the next
    ``ensure_running()`` attaches afresh.
    """

    def __init__(self, config: Optional[BrowserConfig] = None) -> None:
        """Initialize remote browser settings.

        Args:
            config: Endpoint, viewport and timeout settings.
        """
        self.config = config or BrowserConfig()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._active_page: Optional[Page] = None
        self._viewport: Optional[ViewportConfig] = None
        self._disconnect_handlers: list[DisconnectHandler] = []
        self._observed_contexts: list[BrowserContext] = []

    @property
    def browser(self) -> Browser:
        """Get the attached browser instance.

        Raises:
            RuntimeError: If not attached.
        """
        if not self._browser:
            raise RuntimeError("Not attached. Call launch() first.")
        return self._browser

    @property
    def is_connected(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    @property
    def active_page(self) -> Optional[Page]:
        """Most recently opened tab seen by the page observer, if still open."""
        if self._active_page is not None and not self._active_page.is_closed():
            return self._active_page
        return None

    def on_disconnect(self, handler: DisconnectHandler) -> None:
        """Register a callback for when the attached browser goes away."""
        self._disconnect_handlers.append(handler)

    async def launch(self) -> Browser:
        """Resolve the configured endpoint and attach to it.

        Raises:
            DiscoveryError: If the endpoint cannot be discovered.
            AttachError: If the connection cannot be established.
        """
        logger.info(
            f"Browser launch options: ws_endpoint={self.config.ws_endpoint} "
            f"cdp_endpoint={self.config.cdp_endpoint}"
        )
        target = await resolve_endpoint(self.config)
        return await self.attach(target, self.config.viewport)

    async def attach(
        self,
        target: ConnectionTarget,
        viewport: Optional[ViewportConfig] = DEFAULT_VIEWPORT,
    ) -> Browser:
        """Connect to ``target`` and install the page and disconnect observers.

        Args:
            target: Resolved connection target.
            viewport: Size applied to tabs opened after attach, or None to
                leave tab sizes alone.

        Returns:
            The attached browser handle.

        Raises:
            AttachError: If the connect call fails or times out.
        """
        if self.is_connected:
            raise RuntimeError("Already attached. Call close() first.")
        await self._cleanup()

        logger.info(f"Using WebSocket endpoint: {target.ws_endpoint}")
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.connect_over_cdp(
                target.ws_endpoint,
                timeout=self.config.attach_timeout,
            )
        except Exception as e:
            logger.error(f"Failed to connect to remote browser at {target.ws_endpoint}: {e}")
            await _stop_playwright(playwright)
            raise AttachError(f"Cannot attach to {target.ws_endpoint}: {e}") from e

        self._playwright = playwright
        self._browser = browser
        self._viewport = viewport
        browser.on("disconnected", self._handle_disconnected)
        self._observe_contexts(browser)

        logger.info(f"Connected to remote browser at {target.ws_endpoint}")
        return browser

    async def ensure_running(self) -> Browser:
        """Return the attached browser, attaching first if needed."""
        if self.is_connected:
            # Contexts created remotely since the last call
            self._observe_contexts(self._browser)
            return self._browser
        return await self.launch()

    async def new_page(self) -> Page:
        """Open a new tab and track it as the active page."""
        page = await open_page(self.browser, self.observe_context)
        self._active_page = page
        return page

    def pages(self) -> list[Page]:
        return list_pages(self.browser)

    async def close(self) -> None:
        """Drop the CDP connection. The remote browser keeps running."""
        logger.info("Disconnecting from remote browser")
        browser = self._browser
        self._browser = None
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                logger.debug(f"Browser close during disconnect failed: {e}")
        await self._cleanup()

    async def __aenter__(self) -> "RemoteBrowser":
        await self.launch()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def observe_context(self, context: BrowserContext) -> None:
        """Install the page observer on ``context``. Safe to call repeatedly."""
        if any(c is context for c in self._observed_contexts):
            return
        self._observed_contexts.append(context)
        context.on("page", self._handle_new_page)

    def _observe_contexts(self, browser: Browser) -> None:
        for context in browser.contexts:
            self.observe_context(context)

    async def _handle_new_page(self, page: Page) -> None:
        self._active_page = page
        logger.debug(f"Tab opened: {page.url}")
        if self._viewport is None:
            return
        try:
            await page.set_viewport_size(self._viewport.as_dict())
        except Exception as e:
            logger.debug(f"Could not size new tab: {e}")

    def _handle_disconnected(self, browser: Browser) -> None:
        if browser is not self._browser:
            return
        logger.warning("Remote browser disconnected")
        self._browser = None
        self._active_page = None
        for handler in list(self._disconnect_handlers):
            try:
                handler(browser)
            except Exception:
                logger.exception("Disconnect handler failed")

    async def _cleanup(self) -> None:
        """Clean up playwright resources."""
        if self._playwright:
            await _stop_playwright(self._playwright)
        self._playwright = None
        self._browser = None
        self._active_page = None
        self._observed_contexts = []


async def _stop_playwright(playwright: Playwright) -> None:
    try:
        await playwright.stop()
    except Exception as e:
        logger.debug(f"Playwright stop failed: {e}")
