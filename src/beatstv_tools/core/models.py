"""Domain models for beatstv-tools.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and must remain pure across the entire lifecycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


# ---------------------------------------------------------------------------
# Dependency checks
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DependencyStatus:
    """Presence of a single external binary."""

    name: str
    """Binary name as looked up on PATH (e.g. ``yt-dlp``)."""

    installed: bool

    path: str | None = None
    """Resolved location of the binary, or ``None`` when missing."""

    version: str | None = None
    """First line of ``--version`` output, when the version check succeeded."""


@dataclass(frozen=True, slots=True)
class DependencyCheckResult:
    """Aggregate report produced by one dependency check."""

    all_satisfied: bool
    dependencies: tuple[DependencyStatus, ...]
    platform: str
    install_instructions: str | None = None

    @property
    def missing(self) -> tuple[str, ...]:
        return tuple(dep.name for dep in self.dependencies if not dep.installed)


InstallStatus = Literal["downloading", "extracting", "complete"]


@dataclass(frozen=True, slots=True)
class InstallEvent:
    """Progress notification emitted by the auto-installer."""

    name: str
    """Display name of the dependency (e.g. ``"MPV Player"``)."""

    status: InstallStatus

    progress: int
    """Integer percentage in ``[0, 100]``."""

    def to_payload(self) -> dict[str, object]:
        return {"name": self.name, "status": self.status, "progress": self.progress}


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Settings:
    """The subset of application settings this package reads."""

    tmdb_api_key: str | None = None


# ---------------------------------------------------------------------------
# TMDB metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Genre:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class CastMember:
    id: int
    name: str
    character: str | None = None
    profile_path: str | None = None
    order: int | None = None


@dataclass(frozen=True, slots=True)
class CrewMember:
    id: int
    name: str
    job: str
    department: str | None = None
    profile_path: str | None = None


@dataclass(frozen=True, slots=True)
class Video:
    """A video listing entry (trailer, teaser, clip...)."""

    id: str
    key: str
    """Site-specific key, e.g. the YouTube video id."""

    name: str
    type: str
    site: str
    official: bool | None = None


@dataclass(frozen=True, slots=True)
class Credits:
    cast: tuple[CastMember, ...] | None = None
    crew: tuple[CrewMember, ...] | None = None


@dataclass(frozen=True, slots=True)
class MovieSearchResult:
    """One entry of a ``search/movie`` response."""

    id: int
    title: str
    original_title: str | None = None
    overview: str | None = None
    release_date: str | None = None
    vote_average: float | None = None
    vote_count: int | None = None
    popularity: float | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    genre_ids: tuple[int, ...] | None = None
    adult: bool | None = None


@dataclass(frozen=True, slots=True)
class MovieDetails:
    """Full movie record, including appended credits and videos."""

    id: int
    title: str
    original_title: str | None = None
    tagline: str | None = None
    overview: str | None = None
    release_date: str | None = None
    runtime: int | None = None
    vote_average: float | None = None
    vote_count: int | None = None
    popularity: float | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    genres: tuple[Genre, ...] | None = None
    imdb_id: str | None = None
    status: str | None = None
    budget: int | None = None
    revenue: int | None = None
    credits: Credits | None = None
    videos: tuple[Video, ...] | None = None

    @property
    def director(self) -> str | None:
        """Name of the first crew member credited exactly as ``Director``."""
        if self.credits is None or not self.credits.crew:
            return None
        for member in self.credits.crew:
            if member.job == "Director":
                return member.name
        return None


@dataclass(frozen=True, slots=True)
class CachedMovie:
    """Flattened cache row: a lossy projection of :class:`MovieDetails`.

    ``genres`` and ``cast`` hold JSON-encoded lists; ``fetched_at`` is a
    unix timestamp in seconds.
    """

    tmdb_id: int
    title: str
    fetched_at: int
    imdb_id: str | None = None
    original_title: str | None = None
    tagline: str | None = None
    overview: str | None = None
    release_date: str | None = None
    runtime: int | None = None
    vote_average: float | None = None
    vote_count: int | None = None
    popularity: float | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    genres: str | None = None
    cast: str | None = None
    director: str | None = None
    trailer_key: str | None = None
    trailer_site: str | None = None
