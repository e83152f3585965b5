"""Remote browser attach, endpoint discovery and tab enumeration."""
from .base import BrowserBackend
from .endpoint import ConnectionTarget, resolve_endpoint
from .remote import RemoteBrowser
from .tabs import TabEntry, get_tab_list, list_pages

__all__ = [
    "BrowserBackend",
    "ConnectionTarget",
    "resolve_endpoint",
    "RemoteBrowser",
    "TabEntry",
    "get_tab_list",
    "list_pages",
]
