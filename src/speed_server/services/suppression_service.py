"""Duplicate suppression for beacon-style speed intents."""

from __future__ import annotations

import logging
from datetime import timedelta

from speed_server.dao.suppression_dao import SuppressionDAO
from speed_server.utils.time import Clock, Time

logger = logging.getLogger(__name__)


class SuppressionService:
    """Admits at most one beacon intent per user per cooldown window.

    A browser re-fetches an image beacon on every page paint, so identical
    requests arrive every few seconds while the portal page is open.
    """

    def __init__(
        self,
        suppression_dao: SuppressionDAO,
        *,
        window_seconds: float = 10,
        clock: Clock = Time.now,
    ) -> None:
        self._dao = suppression_dao
        self._window = timedelta(seconds=window_seconds)
        self._clock = clock

    def admit(self, username: str) -> bool:
        """Return True and stamp the user if outside the window.

        An intent exactly one window after the last accepted one is admitted.
        """
        now = self._clock()
        with self._dao.transaction(username):
            last = self._dao.last_accepted(username)
            if last is not None and now - last < self._window:
                logger.debug(
                    "Suppressed beacon for %s (%.1fs since last)",
                    username, (now - last).total_seconds(),
                )
                return False
            self._dao.record_accepted(username, now)
        return True
