"""In-memory data access for the command queue and its history."""

from __future__ import annotations

import itertools
import threading
from collections import OrderedDict
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from speed_server.models.command import Command, CommandKind, CommandStatus


class CommandDAO:
    """Pending queue plus capped history, guarded by one reentrant lock.

    Use transaction() to make a group of calls indivisible with respect to
    every other caller. Single calls are already atomic on their own.
    """

    def __init__(self, *, history_limit: int = 1000) -> None:
        self._lock = threading.RLock()
        self._pending: list[Command] = []
        self._history: OrderedDict[int, Command] = OrderedDict()
        self._history_limit = history_limit
        self._ids = itertools.count(1)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Hold the queue lock. Nested transactions on one thread are fine."""
        with self._lock:
            yield

    def create_command(
        self,
        *,
        kind: CommandKind,
        username: str,
        created_at: datetime,
        speed: str | None = None,
        ip: str | None = None,
        reason: str | None = None,
    ) -> Command:
        """Append a pending command to the tail of the queue."""
        with self._lock:
            command = Command(
                id=next(self._ids),
                kind=kind,
                username=username,
                created_at=created_at,
                speed=speed,
                ip=ip,
                reason=reason,
            )
            self._pending.append(command)
        return command

    def has_pending(self, username: str, kind: CommandKind) -> bool:
        """True if a pending command of this kind exists for the user."""
        with self._lock:
            return any(
                c.username == username and c.kind == kind
                for c in self._pending
            )

    def drain_pending(self, sent_at: datetime) -> list[Command]:
        """Take every pending command, mark it sent and move it to history.

        Returns the taken commands in queue order.
        """
        with self._lock:
            drained, self._pending = self._pending, []
            for command in drained:
                command.status = CommandStatus.SENT
                command.sent_at = sent_at
                self._append_history(command)
        return drained

    def _append_history(self, command: Command) -> None:
        """Add to history, evicting the oldest entries past the cap."""
        self._history[command.id] = command
        while len(self._history) > self._history_limit:
            self._history.popitem(last=False)

    def find_in_history(self, command_id: int) -> Command | None:
        """Find a drained command by its ID."""
        with self._lock:
            return self._history.get(command_id)

    def mark_confirmed(
        self,
        command: Command,
        *,
        succeeded: bool,
        completed_at: datetime,
        error: str | None = None,
    ) -> None:
        """Record the router's outcome for a sent command."""
        with self._lock:
            command.status = (
                CommandStatus.COMPLETED if succeeded else CommandStatus.FAILED
            )
            command.completed_at = completed_at
            if error:
                command.error = error

    def list_pending(self) -> list[Command]:
        """Return a copy of the pending queue, oldest first."""
        with self._lock:
            return list(self._pending)

    def count_pending(self) -> int:
        """Number of commands waiting for the next poll."""
        with self._lock:
            return len(self._pending)

    def count_history(self) -> int:
        """Number of commands retained in history."""
        with self._lock:
            return len(self._history)

    def recent_history(self, limit: int) -> list[Command]:
        """Most recent history entries, newest first."""
        with self._lock:
            return list(itertools.islice(reversed(self._history.values()), limit))
