"""Drift correction and no-queue eviction over router session snapshots."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from speed_server.dao.command_dao import CommandDAO
from speed_server.dao.snapshot_dao import SnapshotDAO
from speed_server.models.command import CommandKind
from speed_server.models.snapshot import RouterSnapshot
from speed_server.models.speed import Speed
from speed_server.services.speed_service import SpeedService
from speed_server.utils.time import Clock, Time

logger = logging.getLogger(__name__)

NO_QUEUE_REASON = "NoQueue"


class ReconciliationService:
    """Compares what the router reports with what users asked for.

    Each pass holds the queue transaction for its whole duration, so the
    "already pending?" checks cannot race a poll or another pass.
    """

    def __init__(
        self,
        command_dao: CommandDAO,
        snapshot_dao: SnapshotDAO,
        speed_service: SpeedService,
        *,
        clock: Clock = Time.now,
    ) -> None:
        self._command_dao = command_dao
        self._snapshot_dao = snapshot_dao
        self._speeds = speed_service
        self._clock = clock

    def reconcile(
        self,
        users: list[dict[str, Any]],
        stats: dict[str, Any] | None = None,
    ) -> int:
        """Queue corrections for the pushed sessions, then cache the snapshot.

        Returns:
            Number of sessions in the snapshot.
        """
        now = self._clock()
        with self._command_dao.transaction():
            for session in users:
                username = session.get("username")
                if not isinstance(username, str) or not username:
                    continue
                observed = session.get("speed")
                self._correct_drift(username, observed, now)
                self._evict_without_queue(username, observed, now)
        self._snapshot_dao.replace(
            RouterSnapshot(users=list(users), stats=dict(stats or {}), updated_at=now),
        )
        logger.info("Received %d active users from router", len(users))
        return len(users)

    def _correct_drift(self, username: str, observed: object, now: datetime) -> None:
        """Re-apply the desired speed unless a correction is already queued."""
        desired = self._speeds.desired(username)
        if desired is None or desired == observed:
            return
        if self._command_dao.has_pending(username, CommandKind.SET_SPEED):
            return
        command = self._command_dao.create_command(
            kind=CommandKind.SET_SPEED,
            username=username,
            speed=desired,
            created_at=now,
        )
        logger.info(
            "Auto-restore speed #%d: %s %s -> %s",
            command.id, username, observed, desired,
        )

    def _evict_without_queue(self, username: str, observed: object, now: datetime) -> None:
        """Disconnect sessions with no rate limit so the user re-selects one."""
        if not Speed.lacks_queue(observed):
            return
        if self._command_dao.has_pending(username, CommandKind.DISCONNECT):
            return
        command = self._command_dao.create_command(
            kind=CommandKind.DISCONNECT,
            username=username,
            reason=NO_QUEUE_REASON,
            created_at=now,
        )
        logger.info("Auto-disconnect #%d (%s): %s", command.id, observed, username)

    def snapshot(self) -> RouterSnapshot:
        """Return the last snapshot the router pushed."""
        return self._snapshot_dao.current()
