"""Dashboard resource — read-only views over the queue and the router snapshot."""

from __future__ import annotations

from typing import Any

from speed_server.services.command_service import CommandService
from speed_server.services.reconciliation_service import ReconciliationService
from speed_server.utils.time import Time


class DashboardResource:
    """Read-only operations for the management dashboard and status page.

    Built once at startup with all dependencies pre-wired.
    """

    def __init__(
        self,
        *,
        command_service: CommandService,
        reconciliation_service: ReconciliationService,
        recent_commands_limit: int = 20,
        status_page_commands: int = 10,
    ) -> None:
        self._commands = command_service
        self._reconciliation = reconciliation_service
        self._recent_limit = recent_commands_limit
        self._status_limit = status_page_commands

    def active_users(self) -> dict[str, Any]:
        """Return the last session list and router stats."""
        snapshot = self._reconciliation.snapshot()
        return {
            "success": True,
            "users": snapshot.users,
            "stats": snapshot.stats,
            "updated_at": Time.isoformat(snapshot.updated_at),
            "timestamp": Time.isoformat(Time.now()),
        }

    def stats(self) -> dict[str, Any]:
        """Return queue counters and the most recent history entries."""
        snapshot = self._reconciliation.snapshot()
        return {
            "success": True,
            "stats": snapshot.stats,
            "pending_commands": self._commands.pending_count(),
            "executed_commands": self._commands.history_count(),
            "active_users": len(snapshot.users),
            "recent_commands": self._commands.recent_commands(self._recent_limit),
        }

    def status_page(self) -> dict[str, Any]:
        """Values rendered by the human status page."""
        return {
            "pending_commands": self._commands.pending_count(),
            "executed_commands": self._commands.history_count(),
            "server_time": Time.isoformat(Time.now()),
            "recent_commands": self._commands.recent_commands(self._status_limit),
        }
