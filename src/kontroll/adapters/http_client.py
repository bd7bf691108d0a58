"""httpx wrapper for the daemon socket.

Why a wrapper:
- Standardizes timeout, headers and the Unix socket transport.
- Makes testing easy: pass an `httpx.MockTransport` instead of the socket.
"""

from __future__ import annotations

import httpx

from kontroll import __version__
from kontroll.core.config import AppSettings

# Host part is ignored on a Unix socket but httpx needs an absolute URL.
DAEMON_BASE_URL = "http://kontroll.daemon"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` bound to the daemon socket."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": f"kontroll/{__version__}",
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    if transport is None:
        transport = httpx.AsyncHTTPTransport(uds=str(settings.socket_path), retries=0)
    return httpx.AsyncClient(
        base_url=DAEMON_BASE_URL,
        transport=transport,
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers=headers,
    )
