"""Tests for the SQLite movie cache (infra/sqlite_cache.py)."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from conftest import make_details

from beatstv_tools.core.movie_cache import cache_movie_details
from beatstv_tools.exceptions import CacheStoreError
from beatstv_tools.infra.sqlite_cache import SqliteMovieCache

NOW = 1_700_000_000


@pytest.fixture()
def cache(tmp_path: Path):
    store = SqliteMovieCache(tmp_path / "data" / "beatstv.db")
    yield store
    store.close()


class TestSqliteMovieCache:
    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        db = tmp_path / "nested" / "dir" / "beatstv.db"
        store = SqliteMovieCache(db)
        store.close()
        assert db.is_file()

    def test_missing_title(self, cache: SqliteMovieCache) -> None:
        assert cache.get_cached_movie_by_title("Nope") is None

    def test_upsert_then_get(self, cache: SqliteMovieCache) -> None:
        row = cache_movie_details(make_details(), NOW)

        cache.upsert_cached_movie(row)

        assert cache.get_cached_movie_by_title("Inception") == row

    def test_upsert_replaces_by_id(self, cache: SqliteMovieCache) -> None:
        row = cache_movie_details(make_details(), NOW)
        cache.upsert_cached_movie(row)
        cache.upsert_cached_movie(replace(row, fetched_at=NOW + 10, tagline="New"))

        stored = cache.get_cached_movie_by_title("Inception")

        assert stored is not None
        assert stored.fetched_at == NOW + 10
        assert stored.tagline == "New"

    def test_latest_row_wins_for_shared_title(self, cache: SqliteMovieCache) -> None:
        older = cache_movie_details(make_details(id=1, title="Heat"), NOW - 100)
        newer = cache_movie_details(make_details(id=2, title="Heat"), NOW)
        cache.upsert_cached_movie(newer)
        cache.upsert_cached_movie(older)

        stored = cache.get_cached_movie_by_title("Heat")

        assert stored is not None
        assert stored.tmdb_id == 2

    def test_persists_across_connections(self, tmp_path: Path) -> None:
        db = tmp_path / "beatstv.db"
        row = cache_movie_details(make_details(), NOW)
        first = SqliteMovieCache(db)
        first.upsert_cached_movie(row)
        first.close()

        second = SqliteMovieCache(db)
        try:
            assert second.get_cached_movie_by_title("Inception") == row
        finally:
            second.close()

    def test_in_memory(self) -> None:
        store = SqliteMovieCache(":memory:")
        try:
            row = cache_movie_details(make_details(), NOW)
            store.upsert_cached_movie(row)
            assert store.get_cached_movie_by_title("Inception") == row
        finally:
            store.close()

    def test_closed_connection_raises_cache_store_error(self, tmp_path: Path) -> None:
        store = SqliteMovieCache(tmp_path / "beatstv.db")
        store.close()

        with pytest.raises(CacheStoreError):
            store.get_cached_movie_by_title("Inception")
        with pytest.raises(CacheStoreError):
            store.upsert_cached_movie(cache_movie_details(make_details(), NOW))

    def test_unopenable_path(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(CacheStoreError):
            SqliteMovieCache(blocker / "beatstv.db")
