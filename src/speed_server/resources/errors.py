"""Domain exceptions shared by the intake and router resources."""

from __future__ import annotations


class ValidationError(Exception):
    """Raised when a required request field is missing or malformed."""
