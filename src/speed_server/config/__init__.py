"""Configuration package — re-exports for convenience."""

from speed_server.config.loader import ConfigLoader
from speed_server.config.settings import Settings

__all__ = ["ConfigLoader", "Settings"]
