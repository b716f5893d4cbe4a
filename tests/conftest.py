from __future__ import annotations

import asyncio
import json
import sys
from collections.abc import Iterator
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

# Ensure repo root is on sys.path so `import app` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.api.dependencies import get_http_client  # noqa: E402
from app.core.config import SETTINGS  # noqa: E402
from app.core.http_client import build_http_client  # noqa: E402
from app.main import app  # noqa: E402

HUB_URL = SETTINGS.hub_url


class FakeNetwork:
    """Routes outbound requests to canned responses, keyed by full URL.

    Anything not registered fails with a ConnectError, like an
    unreachable host.
    """

    def __init__(self) -> None:
        self._routes: dict[str, object] = {}
        self.requested: list[str] = []

    def json(self, url: str, payload: object, status_code: int = 200) -> None:
        self.raw(url, json.dumps(payload).encode(), status_code)

    def raw(self, url: str, body: bytes, status_code: int = 200) -> None:
        self._routes[url] = (status_code, body, 0.0)

    def slow_json(self, url: str, payload: object, delay: float) -> None:
        self._routes[url] = (200, json.dumps(payload).encode(), delay)

    def hang(self, url: str) -> None:
        self._routes[url] = "hang"

    def hub(self, servers: list[dict]) -> None:
        self.json(HUB_URL, servers)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        route = self._routes.get(url)
        if route is None:
            raise httpx.ConnectError(f"no route to {url}", request=request)
        if route == "hang":
            await asyncio.sleep(3600)
        status_code, body, delay = route  # type: ignore[misc]
        if delay:
            await asyncio.sleep(delay)
        return httpx.Response(
            status_code,
            content=body,
            headers={"Content-Type": "application/json"},
        )

    def client(self) -> httpx.AsyncClient:
        return build_http_client(transport=httpx.MockTransport(self.handler))


def server(address: str, name: str = "test server") -> dict:
    """A hub listing entry."""
    return {"address": address, "name": name}


@pytest.fixture
def network() -> FakeNetwork:
    return FakeNetwork()


@pytest.fixture
def client(network: FakeNetwork) -> Iterator[TestClient]:
    http = network.client()
    app.dependency_overrides[get_http_client] = lambda: http
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_http_client, None)
