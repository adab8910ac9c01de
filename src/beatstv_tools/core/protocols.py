"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so every collaborator can be replaced with an
in-memory fake in tests.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol

from beatstv_tools.core.models import (
    CachedMovie,
    DependencyStatus,
    InstallEvent,
    MovieDetails,
    MovieSearchResult,
    Settings,
)

InstallNotifier = Callable[[InstallEvent], None]
"""Fire-and-forget sink for installer progress events."""


class PlatformDependencyResolver(Protocol):
    """Per-platform strategy for locating external binaries."""

    platform: str
    """Platform identifier: ``"windows"``, ``"macos"``, ``"linux"``, ..."""

    def fallback_candidates(self, name: str) -> Sequence[Path]:
        """Return the non-PATH locations to check for *name*, in order."""
        ...  # pragma: no cover

    def resolve(self, name: str) -> DependencyStatus:
        """Locate *name* on PATH, then in :meth:`fallback_candidates`."""
        ...  # pragma: no cover


class SettingsRepository(Protocol):
    """Read access to application settings."""

    def get_settings(self) -> Settings:
        ...  # pragma: no cover


class MovieCacheRepository(Protocol):
    """Persistent store for :class:`CachedMovie` rows.

    Implementations must map their backend errors to
    :class:`~beatstv_tools.exceptions.CacheStoreError`.
    """

    def get_cached_movie_by_title(self, title: str) -> CachedMovie | None:
        """Return the row whose title matches *title* exactly, if any."""
        ...  # pragma: no cover

    def upsert_cached_movie(self, row: CachedMovie) -> None:
        """Insert *row*, replacing any existing row with the same ``tmdb_id``."""
        ...  # pragma: no cover


class MovieDatabaseClient(Protocol):
    """Contract for remote movie-metadata backends."""

    def search_movie(
        self, title: str, year: int | None = None,
    ) -> list[MovieSearchResult]:
        ...  # pragma: no cover

    def get_movie_details(self, tmdb_id: int) -> MovieDetails:
        ...  # pragma: no cover
