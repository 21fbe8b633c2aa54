"""Tests for dashboard reads, disconnects and the status page."""

from __future__ import annotations

import httpx
import pytest
from conftest import ROUTER_SECRET


@pytest.mark.asyncio
async def test_users_empty_before_first_push(client: httpx.AsyncClient) -> None:
    resp = await client.get("/api/users")
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["users"] == []
    assert data["stats"] == {}
    assert data["updated_at"] is None


@pytest.mark.asyncio
async def test_disconnect_queues_command(client: httpx.AsyncClient) -> None:
    resp = await client.post("/api/user/disconnect", json={"username": "bob"})
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert (await client.get("/api/stats")).json()["pending_commands"] == 1


@pytest.mark.asyncio
async def test_disconnect_missing_username(client: httpx.AsyncClient) -> None:
    resp = await client.post("/api/user/disconnect", json={})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Missing username"


@pytest.mark.asyncio
async def test_disconnect_does_not_change_desired_speed(client: httpx.AsyncClient) -> None:
    await client.post("/api/speed/request", json={"username": "bob", "speed": "8M"})
    await client.post("/api/user/disconnect", json={"username": "bob"})
    resp = await client.get(
        "/api/speed/get", params={"username": "bob", "secret": ROUTER_SECRET},
    )
    assert resp.text == "8M"


@pytest.mark.asyncio
async def test_stats_counts_and_recent_limit(client: httpx.AsyncClient) -> None:
    for n in range(25):
        await client.post("/api/user/disconnect", json={"username": f"user{n}"})
    await client.get("/api/router/commands", params={"secret": ROUTER_SECRET})
    await client.post("/api/user/disconnect", json={"username": "late"})
    await client.post(
        "/api/router/users", params={"secret": ROUTER_SECRET},
        json={"users": [{"username": "a", "speed": "2M"}], "stats": {"cpu": 3}},
    )

    data = (await client.get("/api/stats")).json()
    assert data["pending_commands"] == 1
    assert data["executed_commands"] == 25
    assert data["active_users"] == 1
    assert data["stats"] == {"cpu": 3}
    assert len(data["recent_commands"]) == 20
    assert data["recent_commands"][0]["username"] == "user24"


@pytest.mark.asyncio
async def test_status_page_renders(client: httpx.AsyncClient) -> None:
    for n in range(12):
        await client.post(
            "/api/speed/request", json={"username": f"user{n}", "speed": "4M"},
        )
    await client.get("/api/router/commands", params={"secret": ROUTER_SECRET})

    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    body = resp.text
    assert "Executed Commands: <span class=\"completed\">12</span>" in body
    assert body.count("<li>") == 10
    assert "user11 &rarr; 4M" in body
    assert "user1 &rarr;" not in body


@pytest.mark.asyncio
async def test_status_page_escapes_usernames(client: httpx.AsyncClient) -> None:
    await client.post(
        "/api/speed/request", json={"username": "<script>", "speed": "4M"},
    )
    await client.get("/api/router/commands", params={"secret": ROUTER_SECRET})
    body = (await client.get("/")).text
    assert "<script>" not in body
    assert "&lt;script&gt;" in body
