"""In-memory holder for the last router snapshot."""

from __future__ import annotations

import threading

from speed_server.models.snapshot import RouterSnapshot


class SnapshotDAO:
    """Keeps exactly one snapshot; replace() swaps it atomically."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot = RouterSnapshot()

    def current(self) -> RouterSnapshot:
        """Return the latest snapshot. Empty until the router first pushes."""
        with self._lock:
            return self._snapshot

    def replace(self, snapshot: RouterSnapshot) -> None:
        """Discard the previous snapshot in favour of this one."""
        with self._lock:
            self._snapshot = snapshot
