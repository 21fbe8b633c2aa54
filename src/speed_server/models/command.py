"""Router command model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class CommandKind(str, Enum):
    """What the router is asked to do."""

    SET_SPEED = "set-speed"
    DISCONNECT = "disconnect"


class CommandStatus(str, Enum):
    """Lifecycle: pending -> sent -> completed | failed."""

    PENDING = "pending"
    SENT = "sent"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """True once the router has reported an outcome."""
        return self in (CommandStatus.COMPLETED, CommandStatus.FAILED)


@dataclass
class Command:
    """Command queued for the router.

    Pending commands live in the queue; everything else lives in history.
    """

    id: int
    kind: CommandKind
    username: str
    created_at: datetime
    speed: str | None = None
    ip: str | None = None
    reason: str | None = None
    status: CommandStatus = CommandStatus.PENDING
    sent_at: datetime | None = None
    completed_at: datetime | None = None
    error: str | None = None
