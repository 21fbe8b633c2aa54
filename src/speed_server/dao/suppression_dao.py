"""In-memory data access for the beacon suppression timestamps."""

from __future__ import annotations

from contextlib import AbstractContextManager
from datetime import datetime

from speed_server.utils.locks import KeyedLocks


class SuppressionDAO:
    """username -> time of last accepted beacon intent. Never pruned."""

    def __init__(self) -> None:
        self._locks = KeyedLocks()
        self._accepted_at: dict[str, datetime] = {}

    def transaction(self, username: str) -> AbstractContextManager[None]:
        """Hold this user's entry for a read-compare-write."""
        return self._locks.hold(username)

    def last_accepted(self, username: str) -> datetime | None:
        """Return when the user's last beacon intent was accepted."""
        return self._accepted_at.get(username)

    def record_accepted(self, username: str, accepted_at: datetime) -> None:
        """Stamp a newly accepted beacon intent."""
        self._accepted_at[username] = accepted_at
