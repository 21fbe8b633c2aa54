"""Known speed tokens.

Speeds travel as plain strings; tokens outside this enum are accepted and
passed through unchanged.
"""

from __future__ import annotations

from enum import Enum


class Speed(str, Enum):
    """Rate-limit tiers the hotspot profiles define."""

    ONE_MEG = "1M"
    TWO_MEG = "2M"
    FOUR_MEG = "4M"
    EIGHT_MEG = "8M"
    UNLIMITED = "Unlimited"
    NO_QUEUE = "NoQueue"
    TWO_MEG_AUTO = "2M-Auto"

    @staticmethod
    def lacks_queue(token: object) -> bool:
        """True if the router reports no rate limit attached to the session."""
        return token in (Speed.NO_QUEUE.value, Speed.TWO_MEG_AUTO.value)
