"""Total player count across every server the hub lists.

  Prometheus -> GET /total_players
    -> fetch server list from the hub
    -> poll every server's /status concurrently
    -> sum -> two-line gauge exposition

A new scrape always re-fetches the hub; nothing is cached between scrapes.
"""

from __future__ import annotations

import logging
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.api.dependencies import get_http_client
from app.core.config import SETTINGS
from app.services.aggregator import total_players
from app.services.hub_client import HubUnavailableError, fetch_servers
from app.services.renderer import render_total_players

logger = logging.getLogger(__name__)

router = APIRouter(tags=["exporter"])


@router.get("/total_players", response_class=PlainTextResponse)
async def get_total_players(
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> PlainTextResponse:
    """Render the summed player count of all listed servers.

    If the hub is unavailable the response is still 200, with an empty
    body: the scrape yields no samples rather than a failed target.
    """
    try:
        servers = await fetch_servers(
            client, SETTINGS.hub_url, timeout=SETTINGS.status_timeout
        )
    except HubUnavailableError as e:
        logger.warning("Hub unavailable, serving empty body: %s", e)
        return PlainTextResponse("")

    total = await total_players(client, servers, timeout=SETTINGS.status_timeout)
    return PlainTextResponse(render_total_players(total))
