from __future__ import annotations

import httpx
from fastapi import Request


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Return the shared outbound client opened by the app lifespan.

    Used as a FastAPI dependency so tests can swap in a client backed by
    httpx.MockTransport via app.dependency_overrides.
    """
    return request.app.state.http_client
