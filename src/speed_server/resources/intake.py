"""Intake resource — protocol-agnostic speed and disconnect intents."""

from __future__ import annotations

import logging

from speed_server.resources.errors import ValidationError
from speed_server.services.command_service import CommandService
from speed_server.services.speed_service import SpeedService
from speed_server.services.suppression_service import SuppressionService
from speed_server.utils.crypto import Crypto

logger = logging.getLogger(__name__)


def _required(value: object, name: str) -> str:
    """Return the stripped string value or raise ValidationError."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Missing {name}")
    return value.strip()


class IntakeResource:
    """Accepts intents from the captive portal and the dashboard.

    Built once at startup with all dependencies pre-wired.
    """

    def __init__(
        self,
        *,
        command_service: CommandService,
        speed_service: SpeedService,
        suppression_service: SuppressionService,
        router_secret: str,
        default_speed: str,
    ) -> None:
        self._commands = command_service
        self._speeds = speed_service
        self._suppression = suppression_service
        self._router_secret = router_secret
        self._default_speed = default_speed

    def submit_speed(
        self, username: object, speed: object, ip: object = None,
    ) -> dict[str, object]:
        """Queue a speed change from the portal page. Never suppressed.

        Raises:
            ValidationError: If username or speed is missing.
        """
        user = _required(username, "username or speed")
        spd = _required(speed, "username or speed")
        client_ip = ip if isinstance(ip, str) and ip else None
        with self._commands.transaction():
            self._speeds.remember(user, spd)
            command = self._commands.queue_speed_change(user, spd, client_ip)
        return {
            "success": True,
            "message": "Speed request queued",
            "command_id": command.id,
        }

    def submit_speed_beacon(self, username: object, speed: object) -> bool:
        """Queue a speed change from an image beacon, unless it is a repeat.

        Returns:
            True if a command was queued.

        Raises:
            ValidationError: If username or speed is missing.
        """
        user = _required(username, "username or speed")
        spd = _required(speed, "username or speed")
        if not self._suppression.admit(user):
            return False
        with self._commands.transaction():
            self._speeds.remember(user, spd)
            self._commands.queue_speed_change(user, spd)
        return True

    def submit_disconnect(self, username: object) -> dict[str, object]:
        """Queue a disconnect from the dashboard.

        Raises:
            ValidationError: If username is missing.
        """
        user = _required(username, "username")
        command = self._commands.queue_disconnect(user)
        return {
            "success": True,
            "message": "Disconnect command queued",
            "command_id": command.id,
        }

    def desired_speed(self, username: str, secret: str | None) -> str:
        """Return the user's desired speed token.

        Falls back to the default speed when the user is unknown or the
        router secret is missing or wrong.
        """
        if not username or not Crypto.secrets_match(secret, self._router_secret):
            return self._default_speed
        return self._speeds.desired(username) or self._default_speed
