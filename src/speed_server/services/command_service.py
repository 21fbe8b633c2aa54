"""Business logic for the router command queue."""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from typing import Any

from speed_server.dao.command_dao import CommandDAO
from speed_server.models.command import Command, CommandKind
from speed_server.utils.time import Clock, Time

logger = logging.getLogger(__name__)


class CommandService:
    """Built once at startup with its DAO pre-wired."""

    def __init__(self, command_dao: CommandDAO, *, clock: Clock = Time.now) -> None:
        self._dao = command_dao
        self._clock = clock

    def transaction(self) -> AbstractContextManager[None]:
        """Hold the queue so a group of calls lands without interleaving."""
        return self._dao.transaction()

    def queue_speed_change(
        self, username: str, speed: str, ip: str | None = None,
    ) -> Command:
        """Append a pending set-speed command."""
        command = self._dao.create_command(
            kind=CommandKind.SET_SPEED,
            username=username,
            speed=speed,
            ip=ip,
            created_at=self._clock(),
        )
        logger.info("Queued speed change #%d: %s -> %s", command.id, username, speed)
        return command

    def queue_disconnect(
        self, username: str, reason: str | None = None,
    ) -> Command:
        """Append a pending disconnect command."""
        command = self._dao.create_command(
            kind=CommandKind.DISCONNECT,
            username=username,
            reason=reason,
            created_at=self._clock(),
        )
        logger.info("Queued disconnect #%d: %s", command.id, username)
        return command

    def poll(self) -> list[dict[str, Any]]:
        """Hand every pending command to the router, marking each sent.

        Returns:
            Command dicts in queue order. A command is returned by exactly
            one poll.
        """
        commands = self._dao.drain_pending(self._clock())
        if commands:
            logger.info("Sent %d commands to router", len(commands))
        return [CommandService._command_to_dict(c) for c in commands]

    def confirm(
        self, command_id: int, succeeded: bool, error: str | None = None,
    ) -> bool:
        """Record the router's outcome for a sent command.

        The first confirmation wins; later ones for the same command are
        ignored. Unknown IDs are ignored too.

        Returns:
            True if the command's status changed.
        """
        with self._dao.transaction():
            command = self._dao.find_in_history(command_id)
            if command is None:
                logger.warning("Confirmation for unknown command #%s ignored", command_id)
                return False
            if command.status.is_terminal:
                logger.warning(
                    "Command #%d already %s; confirmation ignored",
                    command_id, command.status.value,
                )
                return False
            self._dao.mark_confirmed(
                command,
                succeeded=succeeded,
                completed_at=self._clock(),
                error=error,
            )
        logger.info(
            "Command #%d %s", command_id, "completed" if succeeded else "failed",
        )
        return True

    def pending_count(self) -> int:
        """Number of commands waiting for the next poll."""
        return self._dao.count_pending()

    def history_count(self) -> int:
        """Number of commands retained in history."""
        return self._dao.count_history()

    def recent_commands(self, limit: int) -> list[dict[str, Any]]:
        """Most recent history entries, newest first, as dicts."""
        return [
            CommandService._command_to_dict(c)
            for c in self._dao.recent_history(limit)
        ]

    @staticmethod
    def _command_to_dict(cmd: Command) -> dict[str, Any]:
        """Serialize a command for the router and the dashboards."""
        return {
            "id": cmd.id,
            "type": cmd.kind.value,
            "username": cmd.username,
            "speed": cmd.speed,
            "ip": cmd.ip,
            "reason": cmd.reason,
            "status": cmd.status.value,
            "created_at": Time.isoformat(cmd.created_at),
            "sent_at": Time.isoformat(cmd.sent_at),
            "completed_at": Time.isoformat(cmd.completed_at),
            "error": cmd.error,
        }
