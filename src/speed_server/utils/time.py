"""Timezone helpers."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]


class Time:
    """Static helpers for datetime handling."""

    @staticmethod
    def now() -> datetime:
        """Current time, UTC-aware. Default clock for services."""
        return datetime.now(timezone.utc)

    @staticmethod
    def isoformat(dt: datetime | None) -> str | None:
        """ISO-8601 string for the wire, or None when unset."""
        return dt.isoformat() if dt is not None else None
