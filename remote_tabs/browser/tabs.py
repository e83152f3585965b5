"""Tab enumeration over every context of a connected browser."""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from playwright.async_api import Browser, BrowserContext, Page

logger = logging.getLogger(__name__)

ContextObserver = Callable[[BrowserContext], None]


@dataclass(frozen=True)
class TabEntry:
    """One row of a tab listing.

    ``index`` is positional in the current enumeration and is only valid
    until the browser's page set changes.
    """

    index: int
    handle: Page
    title: str
    url: str
    active: bool

    def to_record(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "active": self.active,
            "title": self.title,
            "url": self.url,
        }


def list_pages(browser: Browser) -> list[Page]:
    """All open pages, in context order then page order."""
    return [page for context in browser.contexts for page in context.pages]


async def default_context(
    browser: Browser,
    on_new_context: Optional[ContextObserver] = None,
) -> BrowserContext:
    """The first existing context, or a new one if the browser has none.

    ``on_new_context`` sees a freshly created context before any page is
    opened in it.
    """
    if browser.contexts:
        return browser.contexts[0]
    logger.info("Browser has no contexts, creating one")
    context = await browser.new_context()
    if on_new_context is not None:
        on_new_context(context)
    return context


async def open_page(
    browser: Browser,
    on_new_context: Optional[ContextObserver] = None,
) -> Page:
    """Open a blank tab in the browser's default context."""
    context = await default_context(browser, on_new_context)
    return await context.new_page()


def page_index(pages: list[Page], page: Optional[Page]) -> int:
    """Position of ``page`` in ``pages``, or -1."""
    if page is None:
        return -1
    for i, candidate in enumerate(pages):
        if candidate is page:
            return i
    return -1


async def get_tab_list(browser: Browser, active_index: int) -> list[TabEntry]:
    """Enumerate the browser's tabs afresh.

    Args:
        browser: Connected browser handle.
        active_index: Index to flag as active, or -1 for none.

    Returns:
        Tab entries in enumeration order.
    """
    entries: list[TabEntry] = []
    for i, page in enumerate(list_pages(browser)):
        entries.append(
            TabEntry(
                index=i,
                handle=page,
                title=await page.title(),
                url=page.url,
                active=i == active_index,
            )
        )
    return entries


def format_tab_lines(tabs: list[TabEntry], labelled: bool = True) -> str:
    if labelled:
        return "\n".join(f"[{t.index}] Title: {t.title} (URL: {t.url})" for t in tabs)
    return "\n".join(f"[{t.index}] {t.title} ({t.url})" for t in tabs)
