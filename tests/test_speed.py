"""Tests for captive-portal speed intake endpoints."""

from __future__ import annotations

import base64

import httpx
import pytest
from conftest import ROUTER_SECRET, FakeClock

_PIXEL = base64.b64decode("R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7")


async def _pending(client: httpx.AsyncClient) -> int:
    resp = await client.get("/api/stats")
    return int(resp.json()["pending_commands"])


# --- direct intake ---


@pytest.mark.asyncio
async def test_request_speed_queues_command(client: httpx.AsyncClient) -> None:
    """POST /api/speed/request queues a command and returns its id."""
    resp = await client.post(
        "/api/speed/request",
        json={"username": "alice", "speed": "4M", "ip": "10.5.50.7"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["command_id"] == 1
    assert await _pending(client) == 1


@pytest.mark.asyncio
async def test_request_speed_is_never_suppressed(client: httpx.AsyncClient) -> None:
    for _ in range(3):
        await client.post("/api/speed/request", json={"username": "alice", "speed": "4M"})
    assert await _pending(client) == 3


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [{"speed": "4M"}, {"username": "alice"}, {"username": "", "speed": "4M"}, {}],
)
async def test_request_speed_missing_fields(
    client: httpx.AsyncClient, body: dict[str, str],
) -> None:
    """Missing username or speed is rejected without queueing anything."""
    resp = await client.post("/api/speed/request", json=body)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Missing username or speed"
    assert await _pending(client) == 0


# --- beacon intake ---


@pytest.mark.asyncio
async def test_beacon_returns_pixel_and_queues(client: httpx.AsyncClient) -> None:
    resp = await client.get("/api/speed/set", params={"username": "alice", "speed": "8M"})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("image/gif")
    assert resp.headers["cache-control"] == "no-cache, no-store"
    assert resp.content == _PIXEL
    assert await _pending(client) == 1


@pytest.mark.asyncio
async def test_beacon_accepts_short_aliases(client: httpx.AsyncClient) -> None:
    await client.get("/api/speed/set", params={"u": "alice", "s": "8M"})
    polled = await client.get("/api/router/commands", params={"secret": ROUTER_SECRET})
    command = polled.json()["commands"][0]
    assert command["username"] == "alice"
    assert command["speed"] == "8M"


@pytest.mark.asyncio
async def test_beacon_repeat_is_suppressed(
    client: httpx.AsyncClient, clock: FakeClock,
) -> None:
    """A repeat inside the window answers the same pixel but queues nothing."""
    params = {"username": "alice", "speed": "8M"}
    await client.get("/api/speed/set", params=params)
    clock.advance(5)
    resp = await client.get("/api/speed/set", params={"username": "alice", "speed": "1M"})
    assert resp.status_code == 200
    assert resp.content == _PIXEL
    assert await _pending(client) == 1
    # The suppressed intent must not touch the desired speed either.
    desired = await client.get(
        "/api/speed/get", params={"username": "alice", "secret": ROUTER_SECRET},
    )
    assert desired.text == "8M"


@pytest.mark.asyncio
async def test_beacon_after_window_is_accepted(
    client: httpx.AsyncClient, clock: FakeClock,
) -> None:
    params = {"username": "alice", "speed": "8M"}
    await client.get("/api/speed/set", params=params)
    clock.advance(10)
    await client.get("/api/speed/set", params=params)
    assert await _pending(client) == 2


@pytest.mark.asyncio
async def test_beacon_missing_fields_still_returns_pixel(client: httpx.AsyncClient) -> None:
    resp = await client.get("/api/speed/set", params={"username": "alice"})
    assert resp.status_code == 200
    assert resp.content == _PIXEL
    assert await _pending(client) == 0


# --- desired speed query ---


@pytest.mark.asyncio
async def test_get_speed_returns_desired(client: httpx.AsyncClient) -> None:
    await client.post("/api/speed/request", json={"username": "alice", "speed": "4M"})
    resp = await client.get(
        "/api/speed/get", params={"username": "alice", "secret": ROUTER_SECRET},
    )
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text == "4M"


@pytest.mark.asyncio
async def test_get_speed_accepts_header_secret(
    client: httpx.AsyncClient, router_headers: dict[str, str],
) -> None:
    await client.post("/api/speed/request", json={"username": "alice", "speed": "4M"})
    resp = await client.get(
        "/api/speed/get", params={"username": "alice"}, headers=router_headers,
    )
    assert resp.text == "4M"


@pytest.mark.asyncio
async def test_get_speed_unknown_user_defaults(client: httpx.AsyncClient) -> None:
    resp = await client.get(
        "/api/speed/get", params={"username": "nobody", "secret": ROUTER_SECRET},
    )
    assert resp.text == "2M"


@pytest.mark.asyncio
async def test_get_speed_without_secret_defaults(client: httpx.AsyncClient) -> None:
    await client.post("/api/speed/request", json={"username": "alice", "speed": "4M"})
    no_secret = await client.get("/api/speed/get", params={"username": "alice"})
    bad_secret = await client.get(
        "/api/speed/get", params={"username": "alice", "secret": "wrong"},
    )
    assert no_secret.status_code == 200
    assert no_secret.text == "2M"
    assert bad_secret.text == "2M"


# --- CORS ---


@pytest.mark.asyncio
async def test_preflight_allows_portal_origin(client: httpx.AsyncClient) -> None:
    """The portal page, served from the hotspot, may POST JSON cross-origin."""
    resp = await client.options(
        "/api/speed/request",
        headers={
            "Origin": "http://10.5.50.1",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )
    assert resp.status_code in (200, 204)
    assert resp.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_cross_origin_request_carries_allow_origin(client: httpx.AsyncClient) -> None:
    resp = await client.post(
        "/api/speed/request",
        json={"username": "alice", "speed": "4M"},
        headers={"Origin": "http://10.5.50.1"},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
