#!/usr/bin/env python3
"""Run one aggregation pass against the live hub and print the result.

RUN:  python scripts/scrape_once.py [--timeout 5] [--hub URL] [--verbose]

Prints the exact /total_players body, followed by a per-server breakdown
when --verbose is given.  No server needs to be running; this calls the
same hub client, normalizer and poller the endpoint uses.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.core.config import SETTINGS  # noqa: E402
from app.core.http_client import build_http_client  # noqa: E402
from app.core.logging import setup_logging  # noqa: E402
from app.services.aggregator import total_players  # noqa: E402
from app.services.hub_client import HubUnavailableError, fetch_servers  # noqa: E402
from app.services.renderer import render_total_players  # noqa: E402
from app.services.server_poller import poll_player_count  # noqa: E402
from app.services.url_normalizer import (  # noqa: E402
    InvalidAddressError,
    normalize_address,
)


async def _breakdown(hub_url: str, timeout: float) -> None:
    async with build_http_client() as http:
        servers = await fetch_servers(http, hub_url, timeout=timeout)

        async def one(name: str, address: str) -> tuple[str, str, int]:
            try:
                endpoint = normalize_address(address)
            except InvalidAddressError:
                return name, f"{address} (unusable)", 0
            return name, str(endpoint), await poll_player_count(
                http, endpoint, timeout=timeout
            )

        rows = await asyncio.gather(*(one(s.name, s.address) for s in servers))

    for name, endpoint, players in sorted(rows, key=lambda r: -r[2]):
        print(f"  {players:>5}  {name[:40]:<40}  {endpoint}")


async def _scrape(hub_url: str, timeout: float) -> str:
    async with build_http_client() as http:
        try:
            servers = await fetch_servers(http, hub_url, timeout=timeout)
        except HubUnavailableError as e:
            print(f"Hub unavailable: {e}", file=sys.stderr)
            return ""
        total = await total_players(http, servers, timeout=timeout)
    return render_total_players(total)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--hub", default=SETTINGS.hub_url)
    parser.add_argument("--timeout", type=float, default=SETTINGS.status_timeout)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging("warning" if not args.verbose else "info")

    start = time.monotonic()
    body = asyncio.run(_scrape(args.hub, args.timeout))
    elapsed = time.monotonic() - start

    print(body)
    print(f"\n({elapsed:.2f}s)", file=sys.stderr)

    if args.verbose and body:
        print()
        asyncio.run(_breakdown(args.hub, args.timeout))


if __name__ == "__main__":
    main()
