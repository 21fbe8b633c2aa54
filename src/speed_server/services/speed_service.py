"""Business logic for the desired speed of each user."""

from __future__ import annotations

from speed_server.dao.speed_dao import DesiredSpeedDAO


class SpeedService:
    """Built once at startup with its DAO pre-wired."""

    def __init__(self, speed_dao: DesiredSpeedDAO) -> None:
        self._dao = speed_dao

    def remember(self, username: str, speed: str) -> None:
        """Store the speed as the user's desired speed. Last write wins."""
        with self._dao.transaction(username):
            self._dao.set(username, speed)

    def desired(self, username: str) -> str | None:
        """Return the user's desired speed, or None if never requested."""
        with self._dao.transaction(username):
            return self._dao.get(username)
