"""Focused browser and tab shared by all tool calls."""
import asyncio
import logging
from typing import Any, Optional

from playwright.async_api import Browser, Page

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class SessionState:
    """Which browser and which tab the next tool call should act on.

    Tool calls arrive with no handle of their own, so focus lives here.
    ``set`` is the only mutation path; handlers call it whenever they open,
    switch to or close the focused tab. ``lock`` is held by the dispatcher
    for the whole of each tool call.
    """

    def __init__(self) -> None:
        self._browser: Optional[Browser] = None
        self._page: Optional[Page] = None
        self.lock = asyncio.Lock()

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser

    @property
    def page(self) -> Optional[Page]:
        return self._page

    def get(self) -> tuple[Optional[Browser], Optional[Page]]:
        return self._browser, self._page

    def set(self, browser: Any = _UNSET, page: Any = _UNSET) -> None:
        """Overwrite the named fields; omitted fields keep their value."""
        if browser is not _UNSET:
            self._browser = browser
        if page is not _UNSET:
            self._page = page

    def reset(self) -> None:
        logger.debug("Clearing focused browser and tab")
        self._browser = None
        self._page = None


_default_state: Optional[SessionState] = None


def get_session_state() -> SessionState:
    """Process-wide default state."""
    global _default_state
    if _default_state is None:
        _default_state = SessionState()
    return _default_state
