"""Fetch the list of known game servers from the central hub."""

from __future__ import annotations

import asyncio
import logging

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from app.core.metrics import HUB_FETCHES
from app.models.server import ServerEntry

logger = logging.getLogger(__name__)


class HubUnavailableError(RuntimeError):
    """The hub could not be reached or returned an unusable server list."""


class _HubServerIn(BaseModel):
    # The hub also sends statusData, inferredTags, ...; only these matter.
    address: str
    name: str


_SERVER_LIST = TypeAdapter(list[_HubServerIn])

DEFAULT_HUB_TIMEOUT = 5.0


async def fetch_servers(
    client: httpx.AsyncClient,
    hub_url: str,
    *,
    timeout: float = DEFAULT_HUB_TIMEOUT,
) -> list[ServerEntry]:
    """Return every server the hub lists, in hub order.

    Raises HubUnavailableError on transport errors, non-2xx responses, and
    bodies that are not a JSON array of {address, name} objects.  A partial
    list is never returned.

    `timeout` bounds the whole exchange, including a slowly streamed body.
    """
    try:
        async with asyncio.timeout(timeout):
            resp = await client.get(hub_url)
            resp.raise_for_status()
        listed = _SERVER_LIST.validate_json(resp.content)
    except TimeoutError as e:
        HUB_FETCHES.labels(result="error").inc()
        raise HubUnavailableError(f"hub did not answer within {timeout:.1f}s") from e
    except httpx.HTTPError as e:
        HUB_FETCHES.labels(result="error").inc()
        raise HubUnavailableError(f"hub request failed: {e}") from e
    except ValidationError as e:
        HUB_FETCHES.labels(result="error").inc()
        raise HubUnavailableError(
            f"hub returned a malformed server list ({e.error_count()} errors)"
        ) from e

    HUB_FETCHES.labels(result="ok").inc()
    logger.debug("Hub listed %d servers", len(listed))
    return [ServerEntry(address=s.address, name=s.name) for s in listed]
