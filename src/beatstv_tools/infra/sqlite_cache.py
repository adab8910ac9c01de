"""SQLite-backed :class:`MovieCacheRepository`.

One row per TMDB id in the ``tmdb_cache`` table.  Rows are replaced on
upsert and never expired here; freshness is decided by the service.
"""

from __future__ import annotations

import sqlite3
from dataclasses import astuple, fields
from pathlib import Path

from beatstv_tools.core.models import CachedMovie
from beatstv_tools.exceptions import CacheStoreError

_COLUMNS: tuple[str, ...] = tuple(f.name for f in fields(CachedMovie))

_SCHEMA = """
CREATE TABLE IF NOT EXISTS tmdb_cache (
    tmdb_id        INTEGER PRIMARY KEY,
    title          TEXT NOT NULL,
    fetched_at     INTEGER NOT NULL,
    imdb_id        TEXT,
    original_title TEXT,
    tagline        TEXT,
    overview       TEXT,
    release_date   TEXT,
    runtime        INTEGER,
    vote_average   REAL,
    vote_count     INTEGER,
    popularity     REAL,
    poster_path    TEXT,
    backdrop_path  TEXT,
    genres         TEXT,
    "cast"         TEXT,
    director       TEXT,
    trailer_key    TEXT,
    trailer_site   TEXT
);
CREATE INDEX IF NOT EXISTS idx_tmdb_cache_title ON tmdb_cache (title);
"""

_COLUMN_LIST = ", ".join(f'"{name}"' for name in _COLUMNS)
_UPSERT = (
    f"INSERT OR REPLACE INTO tmdb_cache ({_COLUMN_LIST}) "
    f"VALUES ({', '.join('?' for _ in _COLUMNS)})"
)
_SELECT_BY_TITLE = (
    f"SELECT {_COLUMN_LIST} FROM tmdb_cache WHERE title = ? "
    "ORDER BY fetched_at DESC LIMIT 1"
)


class SqliteMovieCache:
    """Movie cache stored in a SQLite database file.

    Pass ``":memory:"`` as *database* for a throwaway in-process cache.
    """

    def __init__(self, database: Path | str) -> None:
        self._database: str = str(database)
        try:
            if self._database != ":memory:":
                Path(self._database).parent.mkdir(parents=True, exist_ok=True)
            self._conn: sqlite3.Connection = sqlite3.connect(self._database)
            self._conn.row_factory = sqlite3.Row
            self._conn.executescript(_SCHEMA)
            self._conn.commit()
        except (OSError, sqlite3.Error) as exc:
            raise CacheStoreError(
                f"Could not open movie cache {self._database}: {exc}",
            ) from exc

    def close(self) -> None:
        self._conn.close()

    # ------------------------------------------------------------------
    # Repository methods
    # ------------------------------------------------------------------

    def get_cached_movie_by_title(self, title: str) -> CachedMovie | None:
        try:
            row = self._conn.execute(_SELECT_BY_TITLE, (title,)).fetchone()
        except sqlite3.Error as exc:
            raise CacheStoreError(f"Movie cache lookup failed: {exc}") from exc
        if row is None:
            return None
        return CachedMovie(**{name: row[name] for name in _COLUMNS})

    def upsert_cached_movie(self, row: CachedMovie) -> None:
        try:
            with self._conn:
                self._conn.execute(_UPSERT, astuple(row))
        except sqlite3.Error as exc:
            raise CacheStoreError(f"Movie cache write failed: {exc}") from exc
