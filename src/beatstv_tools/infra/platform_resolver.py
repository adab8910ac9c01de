"""Per-platform :class:`PlatformDependencyResolver` strategies.

Each resolver knows the platform identifier reported in dependency
checks and the fallback locations searched after PATH.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from beatstv_tools.core.dependency_checker import DependencyChecker
from beatstv_tools.core.models import DependencyCheckResult, DependencyStatus
from beatstv_tools.infra.app_paths import default_install_dir
from beatstv_tools.infra.binary_locator import current_platform, locate_binary

MACOS_PACKAGE_DIRS: tuple[Path, ...] = (
    Path("/opt/homebrew/bin"),
    Path("/usr/local/bin"),
    Path("/opt/local/bin"),
)


class PathOnlyResolver:
    """Resolver for platforms with no fallback locations."""

    def __init__(self, platform: str, *, read_versions: bool = True) -> None:
        self.platform: str = platform
        self._read_versions: bool = read_versions

    def fallback_candidates(self, name: str) -> Sequence[Path]:
        return ()

    def resolve(self, name: str) -> DependencyStatus:
        return locate_binary(
            name,
            self.fallback_candidates(name),
            check_version=self._read_versions,
        )


class WindowsResolver(PathOnlyResolver):
    """Falls back to ``<install_dir>/<name>.exe`` (the bundled ``deps`` folder)."""

    def __init__(
        self,
        install_dir: Path | None = None,
        *,
        read_versions: bool = True,
    ) -> None:
        super().__init__("windows", read_versions=read_versions)
        self.install_dir: Path = (
            install_dir if install_dir is not None else default_install_dir()
        )

    def fallback_candidates(self, name: str) -> Sequence[Path]:
        return (self.install_dir / f"{name}.exe",)


class MacOSResolver(PathOnlyResolver):
    """Falls back to the Homebrew and MacPorts binary directories."""

    def __init__(
        self,
        search_dirs: Sequence[Path] = MACOS_PACKAGE_DIRS,
        *,
        read_versions: bool = True,
    ) -> None:
        super().__init__("macos", read_versions=read_versions)
        self.search_dirs: tuple[Path, ...] = tuple(search_dirs)

    def fallback_candidates(self, name: str) -> Sequence[Path]:
        return tuple(base / name for base in self.search_dirs)


def select_platform_resolver(platform: str | None = None) -> PathOnlyResolver:
    """Return the resolver for *platform* (default: the running one)."""
    resolved = platform if platform is not None else current_platform()
    if resolved == "windows":
        return WindowsResolver()
    if resolved == "macos":
        return MacOSResolver()
    return PathOnlyResolver(resolved)


def check_dependencies() -> DependencyCheckResult:
    """Check the required binaries using the running platform's resolver."""
    return DependencyChecker(select_platform_resolver()).check_dependencies()
