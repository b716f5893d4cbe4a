"""Self-instrumentation for the exporter, using the Prometheus client library.

These describe the exporter's own behaviour (request rates, hub fetch
outcomes, per-server poll outcomes) and are served on /metrics.  The
player-count gauge on /total_players is rendered separately by
app.services.renderer, because its exact text format is fixed.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    # A scrape of /total_players is bounded by the slowest poll (5s default),
    # so the upper buckets matter more here than for a typical API.
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 7.5, 10.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Fan-out metrics
# ---------------------------------------------------------------------------

HUB_FETCHES = Counter(
    "hub_fetches_total",
    "Server list fetches from the hub by result",
    ["result"],  # "ok" or "error"
)

SERVER_POLLS = Counter(
    "server_polls_total",
    "Per-server status polls by result",
    # ok | timeout | transport_error | bad_status | bad_body | invalid_address
    # | error (unexpected exception escaping the poller)
    ["result"],
)

SERVER_POLL_DURATION = Histogram(
    "server_poll_duration_seconds",
    "Duration of a single server status poll, including failed ones",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 3.0, 4.0, 5.0],
)
