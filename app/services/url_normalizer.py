"""Turn hub-listed server addresses into fetchable status URLs.

The hub lists servers under the game's own URI schemes, `ss14://` and
`ss14s://`.  Both start with the four characters `ss14`, so swapping the
first four characters for `http` yields `http://` or `https://`
respectively:

  ss14://host.example/path/   ->  http://host.example:1212/path/status
  ss14s://host.example        ->  https://host.example/status

Plain-HTTP servers without an explicit port listen on the default game
query port, 1212.
"""

from __future__ import annotations

import httpx

DEFAULT_STATUS_PORT = 1212
STATUS_SUFFIX = "/status"

_SCHEME_TOKEN = "http"


class InvalidAddressError(ValueError):
    """The raw address cannot be turned into a usable endpoint."""


def normalize_address(raw: str) -> httpx.URL:
    """Rewrite a raw hub address into the server's status endpoint.

    Raises InvalidAddressError when the rewritten address does not parse
    as an absolute http(s) URL with a host.
    """
    address = raw.strip()
    if len(address) < len(_SCHEME_TOKEN):
        raise InvalidAddressError(f"address too short: {raw!r}")

    rewritten = _SCHEME_TOKEN + address[len(_SCHEME_TOKEN):]

    try:
        url = httpx.URL(rewritten)
    except httpx.InvalidURL as e:
        raise InvalidAddressError(f"unparseable address {raw!r}: {e}") from e

    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidAddressError(f"not an absolute http(s) address: {raw!r}")

    # httpx reports the scheme's default port (80) as None, so an explicit
    # :80 is also moved to the game port.
    if url.scheme == "http" and url.port is None:
        url = url.copy_with(port=DEFAULT_STATUS_PORT)

    # raw_path keeps percent-escapes (%2F, %3F) that url.path would decode.
    path, sep, query = url.raw_path.partition(b"?")
    raw_path = path.rstrip(b"/") + STATUS_SUFFIX.encode() + sep + query
    try:
        return url.copy_with(raw_path=raw_path)
    except httpx.InvalidURL as e:
        raise InvalidAddressError(f"unusable path in {raw!r}: {e}") from e
