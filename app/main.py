from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.api.health import router as health_router
from app.api.metrics_endpoint import router as metrics_router
from app.api.total_players import router as total_players_router
from app.core.config import SETTINGS
from app.core.http_client import lifespan_http_client
from app.core.logging import setup_logging
from app.middleware.metrics import MetricsMiddleware
from app.middleware.request_context import RequestContextMiddleware

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    async with lifespan_http_client() as client:
        app.state.http_client = client
        yield


# only app setup + router registration

app = FastAPI(
    title="ss14-player-exporter",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

# Middleware execution order: last-added runs first (outermost layer).
# RequestContext (outermost) → Metrics → route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(total_players_router)

logger.info(
    "ss14-player-exporter configured  env=%s log_level=%s listen=%s:%d hub=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.host,
    SETTINGS.port,
    SETTINGS.hub_url,
)


def run() -> None:
    """Console entry point: serve the app on the configured address."""
    uvicorn.run(app, host=SETTINGS.host, port=SETTINGS.port, log_config=None)


if __name__ == "__main__":
    run()
