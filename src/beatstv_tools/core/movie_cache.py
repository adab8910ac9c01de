"""Projection between :class:`MovieDetails` and flattened cache rows.

The cache row is lossy on purpose: only what the player displays is
kept.  Genres and the top-billed cast are stored as JSON strings; the
director and trailer are reduced to single scalar columns.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from beatstv_tools.core.models import (
    CachedMovie,
    CastMember,
    Credits,
    CrewMember,
    Genre,
    MovieDetails,
    Video,
)
from beatstv_tools.core.movie_parsing import (
    parse_cast_member,
    parse_genre,
    to_json_ready,
)
from beatstv_tools.exceptions import DecodeError

CACHE_TTL_DAYS = 30
CACHE_TTL_SECONDS = CACHE_TTL_DAYS * 24 * 60 * 60

TOP_CAST_LIMIT = 10

T = TypeVar("T")


def is_fresh(row: CachedMovie, now: int) -> bool:
    """Whether *row* was fetched less than :data:`CACHE_TTL_DAYS` ago."""
    return now - row.fetched_at < CACHE_TTL_SECONDS


# ---------------------------------------------------------------------------
# Trailer selection
# ---------------------------------------------------------------------------

def select_trailer(videos: Sequence[Video] | None) -> Video | None:
    """Pick the video to use as the trailer.

    Preference order, first occurrence winning within each tier:
    official YouTube trailer, any YouTube trailer, any YouTube video.
    """
    if not videos:
        return None
    youtube = [v for v in videos if v.site == "YouTube"]
    trailers = [v for v in youtube if v.type == "Trailer"]
    for video in trailers:
        if video.official:
            return video
    if trailers:
        return trailers[0]
    return youtube[0] if youtube else None


# ---------------------------------------------------------------------------
# Details → row
# ---------------------------------------------------------------------------

def cache_movie_details(details: MovieDetails, now: int) -> CachedMovie:
    """Flatten *details* into the row stored by the metadata cache."""
    cast_json: str | None = None
    if details.credits is not None and details.credits.cast is not None:
        top_cast = details.credits.cast[:TOP_CAST_LIMIT]
        cast_json = json.dumps([to_json_ready(member) for member in top_cast])

    genres_json: str | None = None
    if details.genres is not None:
        genres_json = json.dumps([to_json_ready(genre) for genre in details.genres])

    trailer = select_trailer(details.videos)

    return CachedMovie(
        tmdb_id=details.id,
        title=details.title,
        fetched_at=now,
        imdb_id=details.imdb_id,
        original_title=details.original_title,
        tagline=details.tagline,
        overview=details.overview,
        release_date=details.release_date,
        runtime=details.runtime,
        vote_average=details.vote_average,
        vote_count=details.vote_count,
        popularity=details.popularity,
        poster_path=details.poster_path,
        backdrop_path=details.backdrop_path,
        genres=genres_json,
        cast=cast_json,
        director=details.director,
        trailer_key=trailer.key if trailer else None,
        trailer_site=trailer.site if trailer else None,
    )


# ---------------------------------------------------------------------------
# Row → details
# ---------------------------------------------------------------------------

def _load_json_list(
    encoded: str | None,
    parse: Callable[[dict[str, Any]], T],
) -> tuple[T, ...] | None:
    """Decode a JSON list column; malformed content reads as absent."""
    if encoded is None:
        return None
    try:
        raw = json.loads(encoded)
        if not isinstance(raw, list):
            return None
        return tuple(parse(entry) for entry in raw if isinstance(entry, dict))
    except (ValueError, DecodeError):
        return None


def cached_row_to_details(row: CachedMovie) -> MovieDetails:
    """Rebuild an API-shaped :class:`MovieDetails` from a cache row.

    ``status``, ``budget`` and ``revenue`` are not cached and come back
    as ``None``.
    """
    genres: tuple[Genre, ...] | None = _load_json_list(row.genres, parse_genre)
    cast: tuple[CastMember, ...] | None = _load_json_list(row.cast, parse_cast_member)

    credits: Credits | None = None
    if cast is not None or row.director is not None:
        crew = None
        if row.director is not None:
            crew = (
                CrewMember(
                    id=0,
                    name=row.director,
                    job="Director",
                    department="Directing",
                ),
            )
        credits = Credits(cast=cast, crew=crew)

    videos: tuple[Video, ...] | None = None
    if row.trailer_key is not None:
        videos = (
            Video(
                id="cached",
                key=row.trailer_key,
                name="Trailer",
                type="Trailer",
                site=row.trailer_site or "YouTube",
                official=True,
            ),
        )

    return MovieDetails(
        id=row.tmdb_id,
        title=row.title,
        original_title=row.original_title,
        tagline=row.tagline,
        overview=row.overview,
        release_date=row.release_date,
        runtime=row.runtime,
        vote_average=row.vote_average,
        vote_count=row.vote_count,
        popularity=row.popularity,
        poster_path=row.poster_path,
        backdrop_path=row.backdrop_path,
        genres=genres,
        imdb_id=row.imdb_id,
        credits=credits,
        videos=videos,
    )
