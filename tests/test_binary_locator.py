"""Tests for binary lookup (infra/binary_locator.py, infra/platform_resolver.py).

Coverage:
* ``locate_binary`` with real fake executables on PATH (POSIX only).
* Fallback locations and first-match-wins ordering.
* ``read_version`` success, non-zero exit and launch failure.
* Platform identifiers and resolver selection.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from beatstv_tools.infra.binary_locator import (
    current_platform,
    locate_binary,
    read_version,
)
from beatstv_tools.infra.platform_resolver import (
    MacOSResolver,
    PathOnlyResolver,
    WindowsResolver,
    select_platform_resolver,
)

posix_only = pytest.mark.skipif(
    sys.platform == "win32", reason="uses POSIX shell scripts as fake binaries",
)


def _fake_binary(directory: Path, name: str, output: str = "") -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(f"#!/bin/sh\necho '{output or name + ' 1.0.0'}'\n")
    path.chmod(0o755)
    return path


# ---------------------------------------------------------------------------
# locate_binary
# ---------------------------------------------------------------------------

@posix_only
class TestLocateBinary:
    def test_found_on_path_with_version(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        bin_dir = tmp_path / "bin"
        _fake_binary(bin_dir, "mpv", "mpv 0.38.0 Copyright (C) 2000-2024")
        monkeypatch.setenv("PATH", str(bin_dir))

        status = locate_binary("mpv")

        assert status.installed is True
        assert status.path == str(bin_dir / "mpv")
        assert status.version == "mpv 0.38.0 Copyright (C) 2000-2024"

    def test_missing_everywhere(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("PATH", str(tmp_path))

        status = locate_binary("mpv", [tmp_path / "deps" / "mpv.exe"])

        assert status.installed is False
        assert status.path is None
        assert status.version is None

    def test_fallback_used_when_not_on_path(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("PATH", str(tmp_path / "empty"))
        fallback = _fake_binary(tmp_path / "brew", "ffmpeg")

        status = locate_binary("ffmpeg", [tmp_path / "nope" / "ffmpeg", fallback])

        assert status.installed is True
        assert status.path == str(fallback)
        assert status.version == "ffmpeg 1.0.0"

    def test_path_wins_over_fallback(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        on_path = _fake_binary(tmp_path / "bin", "yt-dlp")
        fallback = _fake_binary(tmp_path / "other", "yt-dlp")
        monkeypatch.setenv("PATH", str(on_path.parent))

        status = locate_binary("yt-dlp", [fallback])

        assert status.path == str(on_path)

    def test_version_check_disabled(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        _fake_binary(tmp_path / "bin", "mpv")
        monkeypatch.setenv("PATH", str(tmp_path / "bin"))

        status = locate_binary("mpv", check_version=False)

        assert status.installed is True
        assert status.version is None


# ---------------------------------------------------------------------------
# read_version
# ---------------------------------------------------------------------------

class TestReadVersion:
    @patch("beatstv_tools.infra.binary_locator.subprocess.run")
    def test_first_line_of_stdout(self, mock_run: MagicMock) -> None:
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout="ffmpeg version 7.0\nbuilt with gcc\n", stderr="",
        )
        assert read_version("/usr/bin/ffmpeg") == "ffmpeg version 7.0"
        args, _kwargs = mock_run.call_args
        assert args[0] == ["/usr/bin/ffmpeg", "--version"]

    @patch("beatstv_tools.infra.binary_locator.subprocess.run")
    def test_non_zero_exit_is_none(self, mock_run: MagicMock) -> None:
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=1, stdout="usage", stderr="bad flag",
        )
        assert read_version("mpv") is None

    @patch("beatstv_tools.infra.binary_locator.subprocess.run")
    def test_empty_output_is_none(self, mock_run: MagicMock) -> None:
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout="", stderr="",
        )
        assert read_version("mpv") is None

    @patch(
        "beatstv_tools.infra.binary_locator.subprocess.run",
        side_effect=FileNotFoundError("no such file"),
    )
    def test_launch_failure_is_none(self, _mock_run: MagicMock) -> None:
        assert read_version("mpv") is None

    @patch(
        "beatstv_tools.infra.binary_locator.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="mpv", timeout=10),
    )
    def test_timeout_is_none(self, _mock_run: MagicMock) -> None:
        assert read_version("mpv") is None


# ---------------------------------------------------------------------------
# Platforms and resolvers
# ---------------------------------------------------------------------------

class TestCurrentPlatform:
    @pytest.mark.parametrize(
        ("system", "expected"),
        [("Windows", "windows"), ("Darwin", "macos"), ("Linux", "linux"), ("FreeBSD", "freebsd")],
    )
    def test_mapping(self, system: str, expected: str) -> None:
        with patch("beatstv_tools.infra.binary_locator.platform.system", return_value=system):
            assert current_platform() == expected


class TestResolvers:
    def test_windows_fallback_is_deps_exe(self, tmp_path: Path) -> None:
        resolver = WindowsResolver(tmp_path / "deps")
        assert resolver.platform == "windows"
        assert list(resolver.fallback_candidates("mpv")) == [tmp_path / "deps" / "mpv.exe"]

    def test_macos_fallbacks_in_order(self) -> None:
        resolver = MacOSResolver()
        assert [str(p) for p in resolver.fallback_candidates("mpv")] == [
            str(Path("/opt/homebrew/bin/mpv")),
            str(Path("/usr/local/bin/mpv")),
            str(Path("/opt/local/bin/mpv")),
        ]

    def test_linux_has_no_fallbacks(self) -> None:
        assert list(PathOnlyResolver("linux").fallback_candidates("mpv")) == []

    @pytest.mark.parametrize(
        ("platform", "resolver_type"),
        [("windows", WindowsResolver), ("macos", MacOSResolver), ("linux", PathOnlyResolver)],
    )
    def test_select(self, platform: str, resolver_type: type) -> None:
        resolver = select_platform_resolver(platform)
        assert isinstance(resolver, resolver_type)
        assert resolver.platform == platform

    def test_select_unknown_keeps_identifier(self) -> None:
        resolver = select_platform_resolver("haiku")
        assert type(resolver) is PathOnlyResolver
        assert resolver.platform == "haiku"

    @posix_only
    def test_windows_resolver_finds_bundled_exe(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("PATH", str(tmp_path / "empty"))
        bundled = _fake_binary(tmp_path / "deps", "yt-dlp.exe", "2024.08.06")

        status = WindowsResolver(tmp_path / "deps").resolve("yt-dlp")

        assert status.installed is True
        assert status.path == str(bundled)
        assert status.version == "2024.08.06"
