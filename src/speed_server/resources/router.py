"""Router resource — the poll, confirm and push exchange with the router."""

from __future__ import annotations

import logging
from typing import Any

from speed_server.resources.errors import ValidationError
from speed_server.services.command_service import CommandService
from speed_server.services.reconciliation_service import ReconciliationService
from speed_server.utils.crypto import Crypto
from speed_server.utils.time import Time

logger = logging.getLogger(__name__)


class RouterUnauthorizedError(Exception):
    """Raised when the router secret is missing or wrong."""


def _parse_command_id(raw: object) -> int | None:
    """Return the id only if it is an exact integer; fractions never round."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip().isdecimal():
        return int(raw.strip())
    return None


def _truthy(value: object) -> bool:
    """Interpret a success flag that router scripts may send as a string."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "ok")
    return bool(value)


class RouterResource:
    """Router-facing operations. Callers must pass authorize() first.

    Built once at startup with all dependencies pre-wired.
    """

    def __init__(
        self,
        *,
        command_service: CommandService,
        reconciliation_service: ReconciliationService,
        router_secret: str,
    ) -> None:
        self._commands = command_service
        self._reconciliation = reconciliation_service
        self._router_secret = router_secret

    def authorize(self, secret: str | None) -> None:
        """Check the shared secret.

        Raises:
            RouterUnauthorizedError: If the secret does not match.
        """
        if not Crypto.secrets_match(secret, self._router_secret):
            logger.warning("Rejected router request with bad secret")
            raise RouterUnauthorizedError("Unauthorized")

    def poll_commands(self) -> dict[str, Any]:
        """Drain the queue. Each command is returned by exactly one poll."""
        return {
            "success": True,
            "commands": self._commands.poll(),
            "timestamp": Time.isoformat(Time.now()),
        }

    def confirm(self, data: dict[str, Any]) -> dict[str, bool]:
        """Record a command outcome reported by the router.

        Body: {"command_id": 7, "success": true, "error": "..."}.
        ``commandId`` is accepted as an alias for ``command_id``.

        Raises:
            ValidationError: If the command id is missing.
        """
        raw_id = data.get("command_id", data.get("commandId"))
        if raw_id is None or raw_id == "":
            raise ValidationError("Missing command_id")
        error = data.get("error")
        command_id = _parse_command_id(raw_id)
        if command_id is None:
            logger.warning("Confirmation with malformed command id %r ignored", raw_id)
            return {"success": True}
        self._commands.confirm(
            command_id,
            _truthy(data.get("success")),
            str(error) if error else None,
        )
        return {"success": True}

    def push_snapshot(self, data: dict[str, Any]) -> dict[str, Any]:
        """Reconcile the pushed session table and cache it with the stats.

        Body: {"users": [{"username": "...", "speed": "..."}], "stats": {...}}

        Raises:
            ValidationError: If users is not a list or stats not an object.
        """
        users = data.get("users")
        stats = data.get("stats")
        if not isinstance(users, list):
            raise ValidationError("users must be a list")
        if stats is not None and not isinstance(stats, dict):
            raise ValidationError("stats must be an object")
        sessions = [u for u in users if isinstance(u, dict)]
        count = self._reconciliation.reconcile(sessions, stats)
        return {"success": True, "users_count": count}
