"""Settings model — pydantic-settings with env var support."""

from __future__ import annotations

from pydantic_settings import BaseSettings

ENV_PREFIX = "SPEED_"


class Settings(BaseSettings):
    """Server settings.

    Use ``ConfigLoader.load_settings()`` to build with YAML + env var layering.
    Direct construction (e.g. in tests) skips YAML loading.
    """

    router_secret: str = "change-me-in-production"
    suppression_window_seconds: float = 10
    history_limit: int = 1000
    recent_commands_limit: int = 20
    status_page_commands: int = 10
    default_speed: str = "2M"
    log_level: str = "INFO"
    cors_allow_origins: list[str] = ["*"]

    model_config = {"env_prefix": ENV_PREFIX}
