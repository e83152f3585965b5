"""Resolve the WebSocket endpoint of a remote Chrome DevTools instance."""
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ..core.config import DEFAULT_CDP_ENDPOINT, BrowserConfig
from ..core.errors import DiscoveryError

logger = logging.getLogger(__name__)

DEBUGGER_URL_FIELD = "webSocketDebuggerUrl"


@dataclass(frozen=True)
class ConnectionTarget:
    """Where to attach.

    Exactly one of ``direct_endpoint`` and ``discovery_endpoint`` is set.
    ``ws_endpoint`` is the concrete URL handed to the CDP connect call.
    """

    ws_endpoint: str
    direct_endpoint: Optional[str] = None
    discovery_endpoint: Optional[str] = None

    @property
    def is_direct(self) -> bool:
        return self.direct_endpoint is not None


async def resolve_endpoint(
    options: BrowserConfig,
    client: Optional[httpx.AsyncClient] = None,
) -> ConnectionTarget:
    """Determine the attach target for ``options``.

    A configured ``ws_endpoint`` is returned as-is without touching the
    network. Otherwise the discovery URL is queried for the browser's
    WebSocket debugger URL. Nothing is cached: a restarted browser gets a
    new debugger URL.

    Args:
        options: Connection settings.
        client: HTTP client to use; a short-lived one is created if omitted.

    Returns:
        The resolved connection target.

    Raises:
        DiscoveryError: If the metadata call fails or lacks the debugger URL.
    """
    if options.ws_endpoint:
        logger.debug(f"Using configured WebSocket endpoint: {options.ws_endpoint}")
        return ConnectionTarget(
            ws_endpoint=options.ws_endpoint,
            direct_endpoint=options.ws_endpoint,
        )

    discovery_url = options.cdp_endpoint or DEFAULT_CDP_ENDPOINT
    if client is None:
        async with httpx.AsyncClient(timeout=options.discovery_timeout) as owned:
            data = await _fetch_metadata(owned, discovery_url)
    else:
        data = await _fetch_metadata(client, discovery_url)

    ws_endpoint = data.get(DEBUGGER_URL_FIELD)
    if not isinstance(ws_endpoint, str) or not ws_endpoint:
        raise DiscoveryError(
            f"Response from {discovery_url} has no {DEBUGGER_URL_FIELD}"
        )

    logger.debug(f"CDP ready: {data.get('Browser', 'unknown')}")
    return ConnectionTarget(ws_endpoint=ws_endpoint, discovery_endpoint=discovery_url)


async def _fetch_metadata(client: httpx.AsyncClient, url: str) -> dict:
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.TimeoutException as e:
        raise DiscoveryError(f"Timed out querying {url}") from e
    except httpx.HTTPStatusError as e:
        raise DiscoveryError(
            f"{url} answered with HTTP {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise DiscoveryError(f"Cannot reach {url}: {e}") from e

    try:
        data = response.json()
    except ValueError as e:
        raise DiscoveryError(f"Response from {url} is not JSON") from e

    if not isinstance(data, dict):
        raise DiscoveryError(f"Response from {url} is not a JSON object")
    return data
