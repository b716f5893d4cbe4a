from __future__ import annotations

from fastapi.testclient import TestClient

from tests.conftest import HUB_URL, FakeNetwork, server

EXPECTED_TEN = "# TYPE ss14_total_player_count gauge\nss14_total_player_count 10"


def test_sums_players_across_servers(client: TestClient, network: FakeNetwork) -> None:
    network.hub(
        [
            server("ss14://a.example", "A"),
            server("ss14://b.example/", "B"),
            server("ss14://c.example:1313", "C"),
        ]
    )
    network.json("http://a.example:1212/status", {"players": 3})
    network.json("http://b.example:1212/status", {"players": 0})
    network.json("http://c.example:1313/status", {"players": 7})

    resp = client.get("/total_players")
    assert resp.status_code == 200
    assert resp.text == EXPECTED_TEN
    assert resp.headers["content-type"].startswith("text/plain")


def test_failed_server_counts_as_zero(client: TestClient, network: FakeNetwork) -> None:
    network.hub(
        [
            server("ss14://a.example"),
            server("ss14://down.example"),
            server("ss14://c.example"),
        ]
    )
    network.json("http://a.example:1212/status", {"players": 3})
    # down.example is unreachable
    network.json("http://c.example:1212/status", {"players": 7})

    resp = client.get("/total_players")
    assert resp.status_code == 200
    assert resp.text == EXPECTED_TEN


def test_empty_hub_list_renders_zero(client: TestClient, network: FakeNetwork) -> None:
    network.hub([])
    resp = client.get("/total_players")
    assert resp.status_code == 200
    assert resp.text == "# TYPE ss14_total_player_count gauge\nss14_total_player_count 0"


def test_unreachable_hub_returns_empty_body(client: TestClient) -> None:
    resp = client.get("/total_players")
    assert resp.status_code == 200
    assert resp.text == ""


def test_malformed_hub_response_returns_empty_body(
    client: TestClient, network: FakeNetwork
) -> None:
    network.raw(HUB_URL, b"<html>502 Bad Gateway</html>")
    resp = client.get("/total_players")
    assert resp.status_code == 200
    assert resp.text == ""


def test_hub_is_queried_on_every_scrape(client: TestClient, network: FakeNetwork) -> None:
    network.hub([server("ss14://a.example")])
    network.json("http://a.example:1212/status", {"players": 1})

    client.get("/total_players")
    client.get("/total_players")

    assert network.requested.count(HUB_URL) == 2


def test_https_servers_are_polled_on_their_own_port(
    client: TestClient, network: FakeNetwork
) -> None:
    network.hub([server("ss14s://secure.example/game/")])
    network.json("https://secure.example/game/status", {"players": 12})

    resp = client.get("/total_players")
    assert resp.text.endswith("ss14_total_player_count 12")
