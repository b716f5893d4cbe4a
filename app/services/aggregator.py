"""Fan-out/fan-in over every listed server.

One task per server, all started at once, joined with asyncio.gather
before anything is summed.  Total latency is that of the slowest single
poll, which the poller caps with its own deadline.

    servers ──┬─ normalize → poll ─┐
              ├─ normalize → poll ─┼── gather ── sum
              └─ normalize → poll ─┘

No locks are needed: tasks share only the read-only httpx client and
return their contribution instead of writing to shared state.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from app.core.metrics import SERVER_POLLS
from app.models.server import ServerEntry
from app.services.server_poller import DEFAULT_POLL_TIMEOUT, poll_player_count
from app.services.url_normalizer import InvalidAddressError, normalize_address

logger = logging.getLogger(__name__)


async def _server_contribution(
    client: httpx.AsyncClient, entry: ServerEntry, timeout: float
) -> int:
    try:
        endpoint = normalize_address(entry.address)
    except InvalidAddressError as e:
        SERVER_POLLS.labels(result="invalid_address").inc()
        logger.warning(
            "Skipping server %r: %s",
            entry.name,
            e,
            extra={"server": entry.name},
        )
        return 0
    return await poll_player_count(client, endpoint, timeout=timeout)


async def total_players(
    client: httpx.AsyncClient,
    servers: list[ServerEntry],
    *,
    timeout: float = DEFAULT_POLL_TIMEOUT,
) -> int:
    """Sum the player counts of all servers, polling them concurrently.

    Each server contributes its reported count or 0.  Every task is
    awaited before summing, so no contribution is dropped or counted twice.
    """
    if not servers:
        return 0

    results = await asyncio.gather(
        *(_server_contribution(client, entry, timeout) for entry in servers),
        return_exceptions=True,
    )

    total = 0
    for entry, result in zip(servers, results):
        if isinstance(result, BaseException):
            logger.error(
                "Poll of server %r (%s) raised unexpectedly",
                entry.name,
                entry.address,
                exc_info=result,
                extra={"server": entry.name},
            )
            SERVER_POLLS.labels(result="error").inc()
            continue
        total += result

    logger.info("Polled %d servers: %d players in total", len(servers), total)
    return total
