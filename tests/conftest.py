"""Shared fixtures for speed_server tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from speed_server.app import create_app
from speed_server.config import Settings

ROUTER_SECRET = "test-router-secret"


class FakeClock:
    """Manually advanced clock injected into services."""

    def __init__(self) -> None:
        self.current = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


@pytest.fixture()
def settings() -> Settings:
    """Test settings with a known router secret."""
    return Settings(router_secret=ROUTER_SECRET, log_level="DEBUG")


@pytest.fixture()
def clock() -> FakeClock:
    """Fresh fake clock per test."""
    return FakeClock()


@pytest.fixture()
def router_headers() -> dict[str, str]:
    """Headers carrying the router secret."""
    return {"X-Router-Secret": ROUTER_SECRET}


@pytest.fixture()
async def client(
    settings: Settings, clock: FakeClock,
) -> AsyncIterator[httpx.AsyncClient]:
    """Async HTTP client wired to a fresh app with its own state."""
    app = create_app(settings, clock=clock)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
