"""Process-wide outbound HTTP client.

One httpx.AsyncClient (and therefore one connection pool) is created at
startup and shared by every scrape and every concurrent poll.  Nothing on
it is mutated after construction; per-request options such as the poll
deadline are passed per call.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx

from app.core.config import SETTINGS

logger = logging.getLogger(__name__)

USER_AGENT = "ss14-player-exporter/0.1.0"

# The hub lists a few hundred servers; this caps sockets opened per scrape
# without serializing the fan-out in practice.
_LIMITS = httpx.Limits(max_connections=512, max_keepalive_connections=64)


def build_http_client(
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the shared client.  Tests pass an httpx.MockTransport."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(SETTINGS.status_timeout),
        limits=_LIMITS,
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
        transport=transport,
    )


@asynccontextmanager
async def lifespan_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Open the shared client on startup, close its pool on shutdown."""
    async with build_http_client() as client:
        logger.info("Outbound HTTP client ready (hub=%s)", SETTINGS.hub_url)
        yield client
    logger.info("Outbound HTTP client closed")
