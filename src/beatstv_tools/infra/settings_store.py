"""Settings repositories.

The player's real settings live in its own store; these adapters cover
the standalone CLI (environment / ``.env``) and programmatic callers.
"""

from __future__ import annotations

import os

from beatstv_tools.core.models import Settings

TMDB_API_KEY_ENV = "TMDB_API_KEY"


class EnvSettingsRepository:
    """Reads settings from environment variables on every call."""

    def get_settings(self) -> Settings:
        return Settings(tmdb_api_key=os.getenv(TMDB_API_KEY_ENV) or None)


class StaticSettingsRepository:
    """Serves a fixed :class:`Settings` value."""

    def __init__(self, settings: Settings) -> None:
        self._settings: Settings = settings

    def get_settings(self) -> Settings:
        return self._settings
