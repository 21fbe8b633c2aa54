"""In-memory data access for desired speeds per user."""

from __future__ import annotations

from contextlib import AbstractContextManager

from speed_server.utils.locks import KeyedLocks


class DesiredSpeedDAO:
    """username -> last speed accepted for that user. Never pruned."""

    def __init__(self) -> None:
        self._locks = KeyedLocks()
        self._speeds: dict[str, str] = {}

    def transaction(self, username: str) -> AbstractContextManager[None]:
        """Hold this user's entry. Other users are not blocked."""
        return self._locks.hold(username)

    def get(self, username: str) -> str | None:
        """Return the desired speed, or None if the user never asked."""
        return self._speeds.get(username)

    def set(self, username: str, speed: str) -> None:
        """Overwrite the desired speed."""
        self._speeds[username] = speed
