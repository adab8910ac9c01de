"""Infrastructure: download and install missing binaries (Windows only).

Each supported dependency has an installer that picks a download URL
(from the GitHub release index for mpv, fixed URLs for ffmpeg and
yt-dlp), streams it into the install directory, extracts archives with
``tar`` (falling back to PowerShell ``Expand-Archive``) and moves the
binary to the top level of the install directory.

Rules
-----
* Every ``requests`` / ``OSError`` failure is re-raised as a typed
  :class:`~beatstv_tools.exceptions.BeatsTvToolsError` subclass.
* Progress goes to the injected notifier only; notifier failures are
  ignored.
* Downloads are written to ``<dest>.part`` and renamed on completion.
* No retries.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests

from beatstv_tools.core.download_progress import DownloadProgress
from beatstv_tools.core.models import InstallEvent
from beatstv_tools.core.protocols import InstallNotifier
from beatstv_tools.exceptions import (
    AssetNotFoundError,
    DecodeError,
    ExtractionError,
    FilesystemError,
    NetworkError,
    UnsupportedDependencyError,
    UnsupportedPlatformError,
)
from beatstv_tools.infra.app_paths import default_install_dir
from beatstv_tools.infra.binary_locator import current_platform
from beatstv_tools.version import __version__

logger = logging.getLogger(__name__)

MPV_RELEASE_API_URL = "https://api.github.com/repos/mpv-player/mpv/releases/latest"
FFMPEG_DOWNLOAD_URL = "https://www.gyan.dev/ffmpeg/builds/ffmpeg-release-essentials.zip"
YTDLP_DOWNLOAD_URL = (
    "https://github.com/yt-dlp/yt-dlp/releases/latest/download/yt-dlp.exe"
)

USER_AGENT = f"BeatsTV-Updater/{__version__}"
REQUEST_TIMEOUT_SECONDS = 30.0
DOWNLOAD_CHUNK_SIZE = 64 * 1024

SUPPORTED_PLATFORM = "windows"

CommandRunner = Callable[..., "subprocess.CompletedProcess[str]"]


# ---------------------------------------------------------------------------
# Release index
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AssetFilter:
    """Substring criteria an asset name must satisfy."""

    arch: str
    toolchain: str
    extension: str

    def matches(self, name: str) -> bool:
        return (
            self.arch in name
            and self.toolchain in name
            and name.endswith(self.extension)
        )


MPV_ASSET_FILTER = AssetFilter(arch="x86_64", toolchain="mingw32", extension=".zip")


def pick_release_asset(release: object, asset_filter: AssetFilter) -> str:
    """Return the download URL of the first asset matching *asset_filter*.

    Raises
    ------
    DecodeError
        If *release* has no ``assets`` list.
    AssetNotFoundError
        If no asset matches.
    """
    assets = release.get("assets") if isinstance(release, dict) else None
    if not isinstance(assets, list):
        raise DecodeError("No assets found in latest release.")

    for asset in assets:
        if not isinstance(asset, dict):
            continue
        name = asset.get("name")
        url = asset.get("browser_download_url")
        if isinstance(name, str) and isinstance(url, str) and asset_filter.matches(name):
            return url

    raise AssetNotFoundError(
        "Could not find a compatible "
        f"{asset_filter.arch} {asset_filter.toolchain} {asset_filter.extension} "
        "asset in the latest release.",
    )


# ---------------------------------------------------------------------------
# Installer
# ---------------------------------------------------------------------------

class AutoInstaller:
    """Installs ``mpv``, ``ffmpeg`` and ``yt-dlp`` into a local directory.

    Parameters
    ----------
    notifier:
        Receives :class:`InstallEvent` progress notifications.
    install_dir:
        Destination directory; defaults to ``deps`` beside the executable.
    platform:
        Platform identifier; defaults to the running platform.
    session:
        ``requests`` session used for every HTTP call.
    run:
        Subprocess runner used for archive extraction.
    """

    def __init__(
        self,
        notifier: InstallNotifier | None = None,
        *,
        install_dir: Path | None = None,
        platform: str | None = None,
        session: requests.Session | None = None,
        run: CommandRunner = subprocess.run,
    ) -> None:
        self._notifier: InstallNotifier | None = notifier
        self.install_dir: Path = (
            install_dir if install_dir is not None else default_install_dir()
        )
        self.platform: str = platform if platform is not None else current_platform()
        self._session: requests.Session = (
            session if session is not None else requests.Session()
        )
        self._run: CommandRunner = run

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def install(self, name: str) -> Path | None:
        """Download and install dependency *name*.

        Returns the installed binary's path, or ``None`` if the download
        succeeded but the binary could not be found in the archive.

        Raises
        ------
        UnsupportedPlatformError
            When not running on Windows.
        UnsupportedDependencyError
            When *name* is not an installable dependency.
        NetworkError, DecodeError, AssetNotFoundError, FilesystemError
            When a step of the installation fails.
        """
        if self.platform != SUPPORTED_PLATFORM:
            raise UnsupportedPlatformError(
                "Auto-install is only supported on Windows at this time.",
                hint="Please use your package manager.",
            )

        installers: dict[str, Callable[[], Path | None]] = {
            "mpv": self._install_mpv,
            "ffmpeg": self._install_ffmpeg,
            "yt-dlp": self._install_ytdlp,
        }
        installer = installers.get(name)
        if installer is None:
            raise UnsupportedDependencyError(
                f"Unsupported dependency: {name}",
                hint=f"Installable dependencies: {', '.join(installers)}",
            )

        self._ensure_install_dir()
        logger.info("Installing %s into %s", name, self.install_dir)
        return installer()

    # ------------------------------------------------------------------
    # Per-dependency installers
    # ------------------------------------------------------------------

    def _install_mpv(self) -> Path | None:
        release = self._fetch_json(MPV_RELEASE_API_URL)
        url = pick_release_asset(release, MPV_ASSET_FILTER)
        return self.download_and_extract("MPV Player", url, "mpv.exe")

    def _install_ffmpeg(self) -> Path | None:
        return self.download_and_extract("FFmpeg", FFMPEG_DOWNLOAD_URL, "ffmpeg.exe")

    def _install_ytdlp(self) -> Path | None:
        dest = self.download_file(
            "yt-dlp", YTDLP_DOWNLOAD_URL, self.install_dir / "yt-dlp.exe",
        )
        self._emit(InstallEvent(name="yt-dlp", status="complete", progress=100))
        return dest

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def download_and_extract(
        self, display_name: str, url: str, target_bin: str,
    ) -> Path | None:
        """Download an archive, extract it and move *target_bin* to the top level.

        The archive is removed afterwards whether or not extraction worked.
        """
        archive = self.install_dir / f"{target_bin}.zip"
        self.download_file(display_name, url, archive)

        try:
            self._emit(InstallEvent(name=display_name, status="extracting", progress=100))
            self.extract_archive(archive)

            installed = self.place_binary(target_bin)
            if installed is None:
                logger.warning("%s not found in %s after extraction", target_bin, archive.name)
        finally:
            self._discard(archive)

        self._emit(InstallEvent(name=display_name, status="complete", progress=100))
        return installed

    def download_file(self, display_name: str, url: str, dest: Path) -> Path:
        """Stream *url* into *dest*, emitting ``downloading`` progress events."""
        logger.info("Downloading %s from %s", display_name, url)
        try:
            response = self._session.get(
                url,
                stream=True,
                headers={"User-Agent": USER_AGENT},
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"Download failed: {exc}", url=url) from exc

        with response:
            if not 200 <= response.status_code < 300:
                raise NetworkError(
                    f"Server returned error {response.status_code}: {url}",
                    status_code=response.status_code,
                    url=url,
                )
            progress = DownloadProgress(_content_length(response))
            self._stream_to_file(response, dest, display_name, progress, url)

        logger.info("Downloaded %d bytes to %s", progress.downloaded, dest)
        return dest

    def extract_archive(self, archive: Path) -> None:
        """Extract *archive* into the install directory.

        Tries ``tar`` first, then PowerShell ``Expand-Archive``.

        Raises
        ------
        ExtractionError
            When both tools fail; carries tar's stderr.
        """
        tar_error = self._run_tool(
            ["tar", "-xf", str(archive), "-C", str(self.install_dir)],
        )
        if tar_error is None:
            return

        logger.info("tar extraction failed, falling back to PowerShell: %s", tar_error)
        ps_error = self._run_tool(
            [
                "powershell",
                "-NoProfile",
                "-Command",
                f"Expand-Archive -LiteralPath {_ps_quote(archive)} "
                f"-DestinationPath {_ps_quote(self.install_dir)} -Force",
            ],
        )
        if ps_error is not None:
            raise ExtractionError(f"Extraction failed: {tar_error}")

    def find_binary(self, filename: str) -> Path | None:
        """Search one level of subdirectories, then the install directory.

        A freshly extracted copy in a subdirectory takes precedence over a
        binary already sitting at the top level.
        """
        try:
            entries = sorted(self.install_dir.iterdir())
            for entry in entries:
                if not entry.is_dir():
                    continue
                for sub_entry in sorted(entry.iterdir()):
                    if sub_entry.is_file() and sub_entry.name == filename:
                        return sub_entry
            for entry in entries:
                if entry.is_file() and entry.name == filename:
                    return entry
        except OSError as exc:
            raise FilesystemError(
                f"Could not scan {self.install_dir}: {exc}",
            ) from exc
        return None


    def place_binary(self, filename: str) -> Path | None:
        """Move *filename* to the top level of the install directory."""
        found = self.find_binary(filename)
        if found is None:
            return None

        dest = self.install_dir / filename
        if found != dest:
            try:
                found.replace(dest)
            except OSError as exc:
                raise FilesystemError(
                    f"Could not move {found} to {dest}: {exc}",
                ) from exc
        return dest

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _ensure_install_dir(self) -> None:
        try:
            self.install_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(
                f"Failed to create deps directory {self.install_dir}: {exc}",
            ) from exc

    def _fetch_json(self, url: str) -> Any:
        try:
            response = self._session.get(
                url,
                headers={"User-Agent": USER_AGENT},
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"GitHub API request failed: {exc}", url=url) from exc

        if not 200 <= response.status_code < 300:
            raise NetworkError(
                f"GitHub API check failed: {response.status_code}",
                status_code=response.status_code,
                url=url,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"Invalid JSON from GitHub API: {url}") from exc

    def _stream_to_file(
        self,
        response: requests.Response,
        dest: Path,
        display_name: str,
        progress: DownloadProgress,
        url: str,
    ) -> None:
        partial = dest.with_name(dest.name + ".part")
        completed = False
        try:
            with partial.open("wb") as fh:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if not chunk:
                        continue
                    fh.write(chunk)
                    percent = progress.advance(len(chunk))
                    if percent is not None:
                        self._emit(
                            InstallEvent(
                                name=display_name,
                                status="downloading",
                                progress=percent,
                            ),
                        )
            partial.replace(dest)
            completed = True
        except requests.RequestException as exc:
            raise NetworkError(f"Stream error: {exc}", url=url) from exc
        except OSError as exc:
            raise FilesystemError(f"Could not write {dest}: {exc}") from exc
        finally:
            if not completed:
                self._discard(partial)

    def _run_tool(self, command: list[str]) -> str | None:
        """Run *command*; return ``None`` on success, else an error description."""
        try:
            completed = self._run(
                command,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            return str(exc)
        if completed.returncode != 0:
            return (completed.stderr or "").strip() or f"exit code {completed.returncode}"
        return None

    @staticmethod
    def _discard(path: Path) -> None:
        """Best-effort removal of a temporary or archive file."""
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.debug("Could not remove %s: %s", path, exc)

    def _emit(self, event: InstallEvent) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier(event)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Install notifier failed for %s: %s", event, exc)


def _ps_quote(path: Path) -> str:
    """Quote *path* as a PowerShell single-quoted string literal."""
    return "'" + str(path).replace("'", "''") + "'"


def _content_length(response: requests.Response) -> int:
    raw = response.headers.get("Content-Length")
    try:
        return int(raw) if raw is not None else 0
    except ValueError:
        return 0


def auto_install_dependency(
    name: str, notifier: InstallNotifier | None = None,
) -> Path | None:
    """Install *name* into the default ``deps`` directory."""
    return AutoInstaller(notifier).install(name)
