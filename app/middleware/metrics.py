"""Prometheus middleware: counts and times every HTTP request.

The URL path is used as the endpoint label; /metrics itself is skipped so
scrapes of it do not inflate the request count.
"""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.core.metrics import ACTIVE_REQUESTS, REQUEST_COUNT, REQUEST_DURATION

_UNINSTRUMENTED_PATHS = frozenset({"/metrics"})


class MetricsMiddleware(BaseHTTPMiddleware):
    """Collect request metrics for everything except /metrics itself."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in _UNINSTRUMENTED_PATHS:
            return await call_next(request)

        ACTIVE_REQUESTS.inc()
        start = time.monotonic()
        status_code = "500"

        try:
            response = await call_next(request)
            status_code = str(response.status_code)
        finally:
            ACTIVE_REQUESTS.dec()
            REQUEST_COUNT.labels(
                method=request.method, endpoint=path, status_code=status_code
            ).inc()
            REQUEST_DURATION.labels(method=request.method, endpoint=path).observe(
                time.monotonic() - start
            )

        return response
