"""Liveness probe.

Does not touch the hub: hub outages show up as empty /total_players
bodies and in hub_fetches_total{result="error"}.
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}
