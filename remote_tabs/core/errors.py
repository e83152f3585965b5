"""Exception types raised while attaching to and driving a remote browser."""


class RemoteTabsError(Exception):
    """Base class for all remote-tabs errors."""


class DiscoveryError(RemoteTabsError):
    """The WebSocket debugger URL could not be resolved.

    Raised for network failures, timeouts, non-2xx responses and metadata
    bodies that lack ``webSocketDebuggerUrl``.
    """


class AttachError(RemoteTabsError):
    """The resolved endpoint refused or failed the CDP handshake."""


class ToolOperationError(RemoteTabsError):
    """A single tab action failed (invalid index, closed handle, navigation)."""
