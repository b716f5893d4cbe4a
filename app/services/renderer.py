"""Prometheus text exposition for the total player gauge.

Written by hand rather than through prometheus_client: scrapers of this
endpoint expect exactly two lines, with no HELP line and an integer value
(prometheus_client would emit `10.0`).
"""

from __future__ import annotations

METRIC_NAME = "ss14_total_player_count"


def render_total_players(total: int) -> str:
    return f"# TYPE {METRIC_NAME} gauge\n{METRIC_NAME} {int(total):d}"
