from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServerEntry:
    """One game server as listed by the hub.

    The address is untrusted and usually not directly fetchable
    (e.g. ss14://host:1212); see app.services.url_normalizer.
    """

    address: str
    name: str
