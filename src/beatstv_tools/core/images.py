"""TMDB image URL construction."""

from __future__ import annotations

TMDB_IMAGE_BASE = "https://image.tmdb.org/t/p"

IMG_POSTER_SMALL = "w185"
IMG_POSTER_MEDIUM = "w342"
IMG_POSTER_LARGE = "w500"
IMG_BACKDROP_SMALL = "w780"
IMG_BACKDROP_LARGE = "w1280"
IMG_PROFILE_SMALL = "w185"


def get_image_url(path: str | None, size: str) -> str | None:
    """Build the full image URL for a TMDB *path* such as ``/abc.jpg``."""
    if path is None:
        return None
    return f"{TMDB_IMAGE_BASE}/{size}{path}"
