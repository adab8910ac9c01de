"""Tests for the CLI command modules (doctor, install, movie).

Rendering goes through the shared stderr Rich console, so output is
asserted via ``capsys``.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from conftest import InMemoryMovieCache, make_details

from beatstv_tools.cli import exit_codes
from beatstv_tools.cli.doctor import _dependency_row, run_doctor
from beatstv_tools.cli.install_prompt import prompt_dependency_selection
from beatstv_tools.cli.movie import _build_summary, _trailer_url, run_movie_lookup
from beatstv_tools.cli.progress import RichInstallProgress
from beatstv_tools.core.dependency_checker import DependencyChecker
from beatstv_tools.core.metadata_service import MetadataService
from beatstv_tools.core.models import DependencyStatus, InstallEvent, MovieSearchResult, Video


class StaticResolver:
    def __init__(self, platform: str, *statuses: DependencyStatus) -> None:
        self.platform = platform
        self._statuses = {s.name: s for s in statuses}

    def fallback_candidates(self, name: str) -> tuple[Path, ...]:
        return ()

    def resolve(self, name: str) -> DependencyStatus:
        return self._statuses.get(name, DependencyStatus(name=name, installed=False))


FOUND = (
    DependencyStatus("mpv", True, "/usr/bin/mpv", "mpv 0.38.0"),
    DependencyStatus("ffmpeg", True, "/usr/bin/ffmpeg", "ffmpeg version 7.0"),
    DependencyStatus("yt-dlp", True, "/usr/bin/yt-dlp", "2024.08.06"),
)


# ---------------------------------------------------------------------------
# doctor
# ---------------------------------------------------------------------------

class TestDoctor:
    def test_all_found(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = run_doctor(DependencyChecker(StaticResolver("linux", *FOUND)))

        assert code == exit_codes.SUCCESS
        assert "All dependencies found." in capsys.readouterr().err

    def test_missing_prints_instructions(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = run_doctor(DependencyChecker(StaticResolver("linux", *FOUND[:2])))

        assert code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "sudo apt install yt-dlp" in err
        assert "beatstv-tools install" not in err

    def test_windows_suggests_install_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = run_doctor(DependencyChecker(StaticResolver("windows")))

        assert code == exit_codes.GENERAL_ERROR
        assert "beatstv-tools install" in capsys.readouterr().err

    def test_rows(self) -> None:
        assert _dependency_row(FOUND[0]) == ("mpv", "/usr/bin/mpv", "mpv 0.38.0", "[green]OK[/green]")
        assert _dependency_row(DependencyStatus("mpv", False))[-1] == "[red]MISSING[/red]"


# ---------------------------------------------------------------------------
# install
# ---------------------------------------------------------------------------

class TestInstallPrompt:
    @patch("beatstv_tools.cli.install_prompt.questionary.checkbox")
    def test_returns_selection(self, mock_checkbox: MagicMock) -> None:
        mock_checkbox.return_value.ask.return_value = ["mpv"]

        selected = prompt_dependency_selection([DependencyStatus("mpv", False), DependencyStatus("ffmpeg", False)])

        assert selected == ["mpv"]
        choices = mock_checkbox.call_args.kwargs["choices"]
        assert [c.value for c in choices] == ["mpv", "ffmpeg"]
        assert all(c.checked for c in choices)

    @patch("beatstv_tools.cli.install_prompt.questionary.checkbox")
    def test_cancel_returns_empty(self, mock_checkbox: MagicMock) -> None:
        mock_checkbox.return_value.ask.return_value = None
        assert prompt_dependency_selection([DependencyStatus("mpv", False)]) == []


class TestRichInstallProgress:
    def test_events_ignored_before_start(self) -> None:
        progress = RichInstallProgress()
        progress(InstallEvent(name="FFmpeg", status="downloading", progress=10))
        assert progress._tasks == {}

    def test_one_task_per_dependency(self) -> None:
        with RichInstallProgress() as progress:
            progress(InstallEvent(name="FFmpeg", status="downloading", progress=40))
            progress(InstallEvent(name="FFmpeg", status="complete", progress=100))
            progress(InstallEvent(name="yt-dlp", status="downloading", progress=5))

            task_id = progress._tasks["FFmpeg"]
            task = next(t for t in progress._progress.tasks if t.id == task_id)
            assert task.completed == 100
            assert task.description == "Installed FFmpeg"
            assert len(progress._tasks) == 2


# ---------------------------------------------------------------------------
# movie
# ---------------------------------------------------------------------------

class TestMovieLookup:
    def test_normalised_query_and_year(self, capsys: pytest.CaptureFixture[str]) -> None:
        client = MagicMock()
        client.search_movie.return_value = [MovieSearchResult(id=27205, title="Inception")]
        client.get_movie_details.return_value = make_details()
        service = MetadataService(client, InMemoryMovieCache())

        code = run_movie_lookup("US| Inception HD (2010)", service)

        assert code == exit_codes.SUCCESS
        client.search_movie.assert_called_once_with("Inception", 2010)
        err = capsys.readouterr().err
        assert "Christopher Nolan" in err

    def test_no_match(self) -> None:
        client = MagicMock()
        client.search_movie.return_value = []
        service = MetadataService(client, InMemoryMovieCache())

        assert run_movie_lookup("Unknown Channel", service) == exit_codes.GENERAL_ERROR

    def test_trailer_url(self) -> None:
        assert _trailer_url(make_details()) == "https://www.youtube.com/watch?v=YoHD9XEInc0"
        vimeo = (Video(id="1", key="k", name="T", type="Trailer", site="Vimeo"),)
        assert _trailer_url(make_details(videos=vimeo)) is None

    def test_summary_skips_empty_fields(self) -> None:
        table = _build_summary(make_details(tagline=None, runtime=None))
        labels = list(table.columns[0].cells)
        assert "Tagline" not in labels
        assert "Runtime" not in labels
        assert "Director" in labels
