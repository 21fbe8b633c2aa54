"""ConfigLoader — per-environment YAML layered under SPEED_* variables."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from speed_server.config.settings import ENV_PREFIX, Settings

_PROFILE_DIR = Path(__file__).resolve().parent
_DEFAULT_PROFILE = "dev"


class ConfigLoader:
    """Resolve Settings for the profile named by SPEED_ENV."""

    @staticmethod
    def _profile() -> str:
        """Active profile name, e.g. ``dev`` or ``prod``."""
        return os.environ.get(f"{ENV_PREFIX}ENV", _DEFAULT_PROFILE)

    @staticmethod
    def _read_profile(profile: str) -> dict[str, Any]:
        """Mapping from <profile>/settings.yaml; empty if the file is absent."""
        path = _PROFILE_DIR / profile / "settings.yaml"
        if not path.is_file():
            return {}
        with path.open() as profile_file:
            loaded = yaml.safe_load(profile_file)
        return loaded if isinstance(loaded, dict) else {}

    @staticmethod
    def _without_env_overrides(values: dict[str, Any]) -> dict[str, Any]:
        """Keys whose SPEED_<KEY> variable is unset."""
        return {
            key: value
            for key, value in values.items()
            if f"{ENV_PREFIX}{key.upper()}" not in os.environ
        }

    @staticmethod
    def load_settings(**overrides: Any) -> Settings:
        """Settings from, highest first: overrides, SPEED_* vars, profile YAML, defaults.

        Init kwargs beat env vars inside pydantic-settings, so profile keys
        are passed only when no SPEED_* variable names them.
        """
        profile_values = ConfigLoader._read_profile(ConfigLoader._profile())
        merged = {**ConfigLoader._without_env_overrides(profile_values), **overrides}
        return Settings(**merged)
