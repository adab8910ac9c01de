"""Raw TMDB JSON → domain-model parsers (pure).

Parsers raise :class:`~beatstv_tools.exceptions.DecodeError` when a
required field is missing or has the wrong type; optional fields
degrade to ``None``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict
from typing import Any, TypeVar

from beatstv_tools.core.models import (
    CastMember,
    Credits,
    CrewMember,
    Genre,
    MovieDetails,
    MovieSearchResult,
    Video,
)
from beatstv_tools.exceptions import DecodeError

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Field accessors
# ---------------------------------------------------------------------------

def _required(raw: dict[str, Any], key: str, kind: type[T]) -> T:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, kind):
        raise DecodeError(f"Missing or invalid field {key!r} in TMDB response.")
    return value


def _optional_str(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    return value if isinstance(value, str) else None


def _optional_int(raw: dict[str, Any], key: str) -> int | None:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _optional_float(raw: dict[str, Any], key: str) -> float | None:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _optional_bool(raw: dict[str, Any], key: str) -> bool | None:
    value = raw.get(key)
    return value if isinstance(value, bool) else None


def _optional_list(
    raw: dict[str, Any] | None,
    key: str,
    parse: Callable[[dict[str, Any]], T],
) -> tuple[T, ...] | None:
    if raw is None:
        return None
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise DecodeError(f"Expected a list for {key!r} in TMDB response.")
    return tuple(parse(_as_object(entry)) for entry in value)


def _as_object(value: object) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError("Expected a JSON object in TMDB response.")
    return value


# ---------------------------------------------------------------------------
# Nested records
# ---------------------------------------------------------------------------

def parse_genre(raw: dict[str, Any]) -> Genre:
    return Genre(id=_required(raw, "id", int), name=_required(raw, "name", str))


def parse_cast_member(raw: dict[str, Any]) -> CastMember:
    return CastMember(
        id=_required(raw, "id", int),
        name=_required(raw, "name", str),
        character=_optional_str(raw, "character"),
        profile_path=_optional_str(raw, "profile_path"),
        order=_optional_int(raw, "order"),
    )


def parse_crew_member(raw: dict[str, Any]) -> CrewMember:
    return CrewMember(
        id=_required(raw, "id", int),
        name=_required(raw, "name", str),
        job=_required(raw, "job", str),
        department=_optional_str(raw, "department"),
        profile_path=_optional_str(raw, "profile_path"),
    )


def parse_video(raw: dict[str, Any]) -> Video:
    return Video(
        id=_required(raw, "id", str),
        key=_required(raw, "key", str),
        name=_required(raw, "name", str),
        type=_required(raw, "type", str),
        site=_required(raw, "site", str),
        official=_optional_bool(raw, "official"),
    )


def parse_credits(raw: dict[str, Any]) -> Credits:
    return Credits(
        cast=_optional_list(raw, "cast", parse_cast_member),
        crew=_optional_list(raw, "crew", parse_crew_member),
    )


# ---------------------------------------------------------------------------
# Top-level records
# ---------------------------------------------------------------------------

def parse_search_result(raw: dict[str, Any]) -> MovieSearchResult:
    genre_ids = raw.get("genre_ids")
    return MovieSearchResult(
        id=_required(raw, "id", int),
        title=_required(raw, "title", str),
        original_title=_optional_str(raw, "original_title"),
        overview=_optional_str(raw, "overview"),
        release_date=_optional_str(raw, "release_date"),
        vote_average=_optional_float(raw, "vote_average"),
        vote_count=_optional_int(raw, "vote_count"),
        popularity=_optional_float(raw, "popularity"),
        poster_path=_optional_str(raw, "poster_path"),
        backdrop_path=_optional_str(raw, "backdrop_path"),
        genre_ids=(
            tuple(g for g in genre_ids if isinstance(g, int))
            if isinstance(genre_ids, list) else None
        ),
        adult=_optional_bool(raw, "adult"),
    )


def parse_search_response(raw: object) -> list[MovieSearchResult]:
    """Parse a ``search/movie`` payload into its ``results`` list."""
    payload = _as_object(raw)
    results = payload.get("results")
    if not isinstance(results, list):
        raise DecodeError("TMDB search response has no 'results' list.")
    return [parse_search_result(_as_object(entry)) for entry in results]


def parse_movie_details(raw: object) -> MovieDetails:
    """Parse a ``movie/{id}`` payload fetched with appended credits/videos."""
    payload = _as_object(raw)

    credits_raw = payload.get("credits")
    videos_raw = payload.get("videos")
    return MovieDetails(
        id=_required(payload, "id", int),
        title=_required(payload, "title", str),
        original_title=_optional_str(payload, "original_title"),
        tagline=_optional_str(payload, "tagline"),
        overview=_optional_str(payload, "overview"),
        release_date=_optional_str(payload, "release_date"),
        runtime=_optional_int(payload, "runtime"),
        vote_average=_optional_float(payload, "vote_average"),
        vote_count=_optional_int(payload, "vote_count"),
        popularity=_optional_float(payload, "popularity"),
        poster_path=_optional_str(payload, "poster_path"),
        backdrop_path=_optional_str(payload, "backdrop_path"),
        genres=_optional_list(payload, "genres", parse_genre),
        imdb_id=_optional_str(payload, "imdb_id"),
        status=_optional_str(payload, "status"),
        budget=_optional_int(payload, "budget"),
        revenue=_optional_int(payload, "revenue"),
        credits=parse_credits(_as_object(credits_raw)) if credits_raw is not None else None,
        videos=(
            _optional_list(_as_object(videos_raw), "results", parse_video)
            if videos_raw is not None else None
        ),
    )


def to_json_ready(record: object) -> dict[str, Any]:
    """Dataclass → plain dict using TMDB's own key names."""
    return asdict(record)  # type: ignore[call-overload]
