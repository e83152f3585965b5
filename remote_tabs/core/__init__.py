"""Core utilities: configuration, errors and logging."""
from .config import Settings, BrowserConfig, ViewportConfig
from .errors import AttachError, DiscoveryError, RemoteTabsError, ToolOperationError
from .logging import setup_logging

__all__ = [
    "Settings",
    "BrowserConfig",
    "ViewportConfig",
    "RemoteTabsError",
    "DiscoveryError",
    "AttachError",
    "ToolOperationError",
    "setup_logging",
]
