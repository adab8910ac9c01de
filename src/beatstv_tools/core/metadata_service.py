"""Core metadata service — cache-first movie lookups.

Depends on a :class:`~beatstv_tools.core.protocols.MovieDatabaseClient`
and a :class:`~beatstv_tools.core.protocols.MovieCacheRepository`
injected at construction time, keeping the core free of any HTTP or
storage imports.

Guarantees
----------
* A fresh cache row short-circuits the network entirely.
* Cache failures never fail a lookup; they are logged and skipped.
* Client errors (``NetworkError``, ``DecodeError``, ``ApiKeyMissingError``)
  propagate unchanged.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from beatstv_tools.core.models import CachedMovie, MovieDetails
from beatstv_tools.core.movie_cache import (
    cache_movie_details,
    cached_row_to_details,
    is_fresh,
)
from beatstv_tools.core.protocols import MovieCacheRepository, MovieDatabaseClient

logger = logging.getLogger(__name__)


def _unix_now() -> int:
    return int(time.time())


class MetadataService:
    """Looks up movie metadata, preferring the local cache.

    Parameters
    ----------
    client:
        Remote movie database (normally :class:`TmdbClient`).
    cache:
        Persistent store for flattened movie rows.
    clock:
        Returns the current unix time in seconds.
    """

    def __init__(
        self,
        client: MovieDatabaseClient,
        cache: MovieCacheRepository,
        *,
        clock: Callable[[], int] = _unix_now,
    ) -> None:
        self._client: MovieDatabaseClient = client
        self._cache: MovieCacheRepository = cache
        self._clock: Callable[[], int] = clock

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def search_and_get_details(
        self, title: str, year: int | None = None,
    ) -> MovieDetails | None:
        """Return full details for the best match of *title*.

        Returns ``None`` when the search finds nothing.
        """
        cached = self._lookup(title)
        if cached is not None and is_fresh(cached, self._clock()):
            logger.debug("Cache hit for %r (tmdb_id=%s)", title, cached.tmdb_id)
            return cached_row_to_details(cached)

        results = self._client.search_movie(title, year)
        if not results:
            logger.info("No TMDB results for %r", title)
            return None

        details = self._client.get_movie_details(results[0].id)
        self.cache_movie_details(details)
        return details

    def cache_movie_details(self, details: MovieDetails) -> None:
        """Best-effort write of *details* to the cache."""
        row = cache_movie_details(details, self._clock())
        try:
            self._cache.upsert_cached_movie(row)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not cache %r: %s", details.title, exc)

    # ------------------------------------------------------------------
    # Cache access (safe boundary)
    # ------------------------------------------------------------------

    def _lookup(self, title: str) -> CachedMovie | None:
        try:
            return self._cache.get_cached_movie_by_title(title)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Cache lookup failed for %r: %s", title, exc)
            return None
