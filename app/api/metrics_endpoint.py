"""Self-instrumentation endpoint.

Serves the exporter's own metrics (request counts and latencies, hub
fetch and per-server poll outcomes) in Prometheus text format.  The
player gauge itself lives on /total_players.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
