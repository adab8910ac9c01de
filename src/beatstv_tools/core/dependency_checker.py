"""Dependency checker — aggregates binary lookups into one report.

The platform-specific search order lives in the injected
:class:`~beatstv_tools.core.protocols.PlatformDependencyResolver`; this
module only iterates the required binaries and builds the result.
"""

from __future__ import annotations

from collections.abc import Sequence

from beatstv_tools.core.install_instructions import install_instructions
from beatstv_tools.core.models import DependencyCheckResult, DependencyStatus
from beatstv_tools.core.protocols import PlatformDependencyResolver

REQUIRED_DEPENDENCIES: tuple[str, ...] = ("mpv", "ffmpeg", "yt-dlp")


class DependencyChecker:
    """Checks that every required external binary is available.

    Parameters
    ----------
    resolver:
        Strategy that knows where binaries live on the current platform.
    required:
        Binary names to check, in report order.
    """

    def __init__(
        self,
        resolver: PlatformDependencyResolver,
        required: Sequence[str] = REQUIRED_DEPENDENCIES,
    ) -> None:
        self._resolver: PlatformDependencyResolver = resolver
        self._required: tuple[str, ...] = tuple(required)

    def check_dependencies(self) -> DependencyCheckResult:
        """Resolve every required binary and return the aggregate report."""
        statuses: list[DependencyStatus] = []
        missing: list[str] = []

        for name in self._required:
            status = self._resolver.resolve(name)
            if not status.installed:
                missing.append(name)
            statuses.append(status)

        all_satisfied = not missing
        return DependencyCheckResult(
            all_satisfied=all_satisfied,
            dependencies=tuple(statuses),
            platform=self._resolver.platform,
            install_instructions=(
                None if all_satisfied
                else install_instructions(self._resolver.platform, missing)
            ),
        )
