"""``requests``-backed implementation of :class:`MovieDatabaseClient`.

This module is the **only** place in the codebase that talks to the
TMDB REST API.  All ``requests`` and JSON failures are caught here and
re-raised as typed :class:`~beatstv_tools.exceptions.BeatsTvToolsError`
subclasses — nothing raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import requests

from beatstv_tools.core.models import MovieDetails, MovieSearchResult
from beatstv_tools.core.movie_parsing import parse_movie_details, parse_search_response
from beatstv_tools.core.protocols import SettingsRepository
from beatstv_tools.exceptions import ApiKeyMissingError, DecodeError, NetworkError

logger = logging.getLogger(__name__)

TMDB_BASE_URL = "https://api.themoviedb.org/3"
TMDB_LANGUAGE = "en-US"
REQUEST_TIMEOUT_SECONDS = 20.0


class TmdbClient:
    """Concrete :class:`MovieDatabaseClient` for The Movie Database.

    Usage::

        client = TmdbClient(EnvSettingsRepository())
        results = client.search_movie("Inception", 2010)
        details = client.get_movie_details(results[0].id)

    The API key is read from *settings* on every call, so a key entered
    while the application is running takes effect immediately.
    """

    def __init__(
        self,
        settings: SettingsRepository,
        *,
        session: requests.Session | None = None,
        base_url: str = TMDB_BASE_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self._settings: SettingsRepository = settings
        self._session: requests.Session = (
            session if session is not None else requests.Session()
        )
        self._base_url: str = base_url.rstrip("/")
        self._timeout: float = timeout

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def search_movie(
        self, title: str, year: int | None = None,
    ) -> list[MovieSearchResult]:
        """Search movies by *title*, optionally narrowed to a release *year*.

        Raises
        ------
        ApiKeyMissingError
            When no API key is configured.
        NetworkError
            When TMDB is unreachable or answers with an error status.
        DecodeError
            When the response is not a valid search payload.
        """
        params: dict[str, Any] = {
            "query": title,
            "include_adult": "false",
            "language": TMDB_LANGUAGE,
        }
        if year is not None:
            params["year"] = year

        payload = self._get("/search/movie", params)
        try:
            return parse_search_response(payload)
        except DecodeError as exc:
            raise DecodeError(f"Failed to parse TMDB search response: {exc}") from exc

    def get_movie_details(self, tmdb_id: int) -> MovieDetails:
        """Fetch one movie with its credits and videos in a single request.

        Raises the same errors as :meth:`search_movie`.
        """
        payload = self._get(
            f"/movie/{tmdb_id}",
            {"append_to_response": "credits,videos", "language": TMDB_LANGUAGE},
        )
        try:
            return parse_movie_details(payload)
        except DecodeError as exc:
            raise DecodeError(f"Failed to parse TMDB movie details: {exc}") from exc

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _api_key(self) -> str:
        key = (self._settings.get_settings().tmdb_api_key or "").strip()
        if not key:
            raise ApiKeyMissingError(
                "TMDB API key not configured.",
                hint="Please add your API key in Settings.",
            )
        return key

    def _get(self, endpoint: str, params: Mapping[str, Any]) -> Any:
        url = f"{self._base_url}{endpoint}"
        query = {"api_key": self._api_key(), **params}

        logger.debug("GET %s %s", url, dict(params))
        try:
            response = self._session.get(url, params=query, timeout=self._timeout)
        except requests.RequestException as exc:
            raise NetworkError(
                f"Failed to connect to TMDB API: {exc}", url=url,
            ) from exc

        if not 200 <= response.status_code < 300:
            raise NetworkError(
                f"TMDB request failed with HTTP {response.status_code}.",
                status_code=response.status_code,
                url=url,
                hint=(
                    "Check that your TMDB API key is valid."
                    if response.status_code == 401 else None
                ),
            )

        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"TMDB returned a non-JSON response from {url}.") from exc
