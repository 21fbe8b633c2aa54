"""Health resource — protocol-agnostic health check logic."""

from __future__ import annotations

from speed_server.services.command_service import CommandService


class HealthResource:
    """Health check operations."""

    def __init__(self, command_service: CommandService) -> None:
        self._commands = command_service

    def check(self) -> dict[str, str | int]:
        """Return server health and the current queue depth."""
        return {"status": "ok", "pending_commands": self._commands.pending_count()}
