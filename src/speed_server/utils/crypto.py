"""Shared-secret helpers for router authentication."""

from __future__ import annotations

import hmac


class Crypto:
    """Static helpers for secret comparison."""

    @staticmethod
    def secrets_match(supplied: str | None, expected: str) -> bool:
        """Constant-time comparison. A missing secret never matches."""
        if not supplied:
            return False
        return hmac.compare_digest(supplied.encode(), expected.encode())
