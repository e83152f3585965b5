"""remote-tabs: tab tools for an already-running remote Chromium browser."""
from .browser import RemoteBrowser, resolve_endpoint
from .state import SessionState, get_session_state

__all__ = ["RemoteBrowser", "resolve_endpoint", "SessionState", "get_session_state"]

__version__ = "0.1.0"
