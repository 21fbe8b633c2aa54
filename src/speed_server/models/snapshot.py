"""Last session table and resource stats pushed by the router."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class RouterSnapshot:
    """Replaced wholesale on every push; never merged."""

    users: list[dict[str, Any]] = field(default_factory=list)
    stats: dict[str, Any] = field(default_factory=dict)
    updated_at: datetime | None = None
