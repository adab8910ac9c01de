"""Shared pytest fixtures and configuration for the beatstv-tools test suite.

Guidelines
----------
* No internet access in any test — ``requests`` sessions are mocked.
* Subprocess-based extraction is replaced by an injected runner.
* Settings and cache collaborators are in-memory fakes.
"""

from __future__ import annotations

from typing import Any

import pytest

from beatstv_tools.core.models import (
    CachedMovie,
    CastMember,
    Credits,
    CrewMember,
    Genre,
    MovieDetails,
    Video,
)
from beatstv_tools.exceptions import CacheStoreError


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class InMemoryMovieCache:
    """Dict-backed :class:`MovieCacheRepository` keyed by TMDB id."""

    def __init__(self, *rows: CachedMovie) -> None:
        self.rows: dict[int, CachedMovie] = {row.tmdb_id: row for row in rows}
        self.fail_reads: bool = False
        self.fail_writes: bool = False

    def get_cached_movie_by_title(self, title: str) -> CachedMovie | None:
        if self.fail_reads:
            raise CacheStoreError("read failed")
        for row in self.rows.values():
            if row.title == title:
                return row
        return None

    def upsert_cached_movie(self, row: CachedMovie) -> None:
        if self.fail_writes:
            raise CacheStoreError("disk full")
        self.rows[row.tmdb_id] = row


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def make_details(**overrides: Any) -> MovieDetails:
    """A fully populated :class:`MovieDetails` for Inception."""
    cast = tuple(
        CastMember(
            id=100 + i,
            name=f"Actor {i}",
            character=f"Role {i}",
            profile_path=f"/actor{i}.jpg",
            order=i,
        )
        for i in range(12)
    )
    defaults: dict[str, Any] = {
        "id": 27205,
        "title": "Inception",
        "original_title": "Inception",
        "tagline": "Your mind is the scene of the crime.",
        "overview": "A thief who steals corporate secrets...",
        "release_date": "2010-07-15",
        "runtime": 148,
        "vote_average": 8.4,
        "vote_count": 35000,
        "popularity": 99.5,
        "poster_path": "/poster.jpg",
        "backdrop_path": "/backdrop.jpg",
        "genres": (Genre(id=28, name="Action"), Genre(id=878, name="Science Fiction")),
        "imdb_id": "tt1375666",
        "status": "Released",
        "budget": 160_000_000,
        "revenue": 825_532_764,
        "credits": Credits(
            cast=cast,
            crew=(
                CrewMember(id=1, name="Emma Thomas", job="Producer", department="Production"),
                CrewMember(id=2, name="Christopher Nolan", job="Director", department="Directing"),
            ),
        ),
        "videos": (
            Video(id="v1", key="teaser1", name="Teaser", type="Teaser", site="YouTube", official=True),
            Video(id="v2", key="fanmade", name="Fan Trailer", type="Trailer", site="YouTube", official=False),
            Video(id="v3", key="YoHD9XEInc0", name="Official Trailer", type="Trailer", site="YouTube", official=True),
        ),
    }
    defaults.update(overrides)
    return MovieDetails(**defaults)


def details_payload() -> dict[str, Any]:
    """Raw ``movie/{id}`` JSON as TMDB returns it with appended data."""
    return {
        "id": 27205,
        "title": "Inception",
        "original_title": "Inception",
        "tagline": "Your mind is the scene of the crime.",
        "overview": "A thief who steals corporate secrets...",
        "release_date": "2010-07-15",
        "runtime": 148,
        "vote_average": 8.4,
        "vote_count": 35000,
        "popularity": 99.5,
        "poster_path": "/poster.jpg",
        "backdrop_path": None,
        "genres": [{"id": 28, "name": "Action"}],
        "imdb_id": "tt1375666",
        "status": "Released",
        "budget": 160000000,
        "revenue": 825532764,
        "credits": {
            "cast": [
                {"id": 6193, "name": "Leonardo DiCaprio", "character": "Cobb",
                 "profile_path": "/leo.jpg", "order": 0},
            ],
            "crew": [
                {"id": 525, "name": "Christopher Nolan", "job": "Director",
                 "department": "Directing", "profile_path": None},
            ],
        },
        "videos": {
            "results": [
                {"id": "abc", "key": "YoHD9XEInc0", "name": "Official Trailer",
                 "type": "Trailer", "site": "YouTube", "official": True},
            ],
        },
    }


@pytest.fixture()
def movie_cache() -> InMemoryMovieCache:
    return InMemoryMovieCache()
