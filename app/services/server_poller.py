"""Query a single game server's status endpoint for its player count.

Every failure collapses to 0 players: an unreachable or misbehaving server
contributes nothing to the total instead of failing the whole scrape.
Failures are logged and counted in server_polls_total so they stay
visible without changing the returned value.
"""

from __future__ import annotations

import asyncio
import logging
import time

import httpx
from pydantic import BaseModel, Field, ValidationError

from app.core.metrics import SERVER_POLL_DURATION, SERVER_POLLS

logger = logging.getLogger(__name__)

DEFAULT_POLL_TIMEOUT = 5.0


class _StatusIn(BaseModel):
    # Extra keys (name, map, round_id, ...) are ignored.
    players: int = Field(ge=0, strict=True)


async def _fetch_players(client: httpx.AsyncClient, endpoint: httpx.URL) -> int:
    resp = await client.get(endpoint)
    resp.raise_for_status()
    return _StatusIn.model_validate_json(resp.content).players


async def poll_player_count(
    client: httpx.AsyncClient,
    endpoint: httpx.URL,
    *,
    timeout: float = DEFAULT_POLL_TIMEOUT,
) -> int:
    """Return the server's reported player count, or 0 on any failure.

    `timeout` is an overall deadline for the whole exchange (connect,
    request, full body read), not httpx's per-phase timeout, so a server
    trickling bytes cannot hold the aggregate past it.
    """
    start = time.monotonic()
    result = None
    try:
        async with asyncio.timeout(timeout):
            players = await _fetch_players(client, endpoint)
        result = "ok"
    except (TimeoutError, httpx.TimeoutException):
        result = "timeout"
        logger.warning(
            "Status poll timed out after %.1fs: %s",
            timeout,
            endpoint,
            extra={"endpoint": str(endpoint)},
        )
        return 0
    except httpx.HTTPStatusError as e:
        result = "bad_status"
        logger.warning(
            "Status poll got HTTP %d: %s",
            e.response.status_code,
            endpoint,
            extra={"endpoint": str(endpoint)},
        )
        return 0
    except httpx.HTTPError as e:
        result = "transport_error"
        logger.warning(
            "Status poll failed: %s (%s: %s)",
            endpoint,
            type(e).__name__,
            e,
            extra={"endpoint": str(endpoint)},
        )
        return 0
    except ValidationError as e:
        result = "bad_body"
        logger.warning(
            "Status poll returned an unusable body: %s (%d errors)",
            endpoint,
            e.error_count(),
            extra={"endpoint": str(endpoint)},
        )
        return 0
    finally:
        # An unexpected exception leaves result unset; the aggregator counts it.
        if result is not None:
            SERVER_POLLS.labels(result=result).inc()
        SERVER_POLL_DURATION.observe(time.monotonic() - start)

    logger.debug("Server %s reports %d players", endpoint, players)
    return players
