"""Infrastructure: external binary lookup and version probing.

This module is responsible for locating an executable on the system
PATH or in a list of fallback locations, and for reading its version
string.

Rules
-----
* PATH lookup via :func:`shutil.which`.
* Version probing is best-effort: any failure yields ``None``.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from beatstv_tools.core.models import DependencyStatus

logger = logging.getLogger(__name__)

VERSION_CHECK_TIMEOUT_SECONDS = 10.0

_PLATFORM_NAMES: dict[str, str] = {
    "windows": "windows",
    "darwin": "macos",
    "linux": "linux",
}


def current_platform() -> str:
    """Return ``"windows"``, ``"macos"``, ``"linux"`` or the raw system name."""
    system = platform.system().lower()
    return _PLATFORM_NAMES.get(system, system or "unknown")


# ---------------------------------------------------------------------------
# Version check
# ---------------------------------------------------------------------------

def read_version(binary: str | Path) -> str | None:
    """Run ``<binary> --version`` and return the first line of stdout.

    Returns ``None`` if the binary cannot be run, exits non-zero or
    prints nothing.
    """
    try:
        completed = subprocess.run(
            [str(binary), "--version"],
            capture_output=True,
            text=True,
            errors="replace",
            timeout=VERSION_CHECK_TIMEOUT_SECONDS,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("Version check failed for %s: %s", binary, exc)
        return None

    if completed.returncode != 0:
        return None
    lines = completed.stdout.splitlines()
    return lines[0] if lines else None


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

def locate_binary(
    name: str,
    fallbacks: Sequence[Path] = (),
    *,
    check_version: bool = True,
) -> DependencyStatus:
    """Locate *name* on PATH, then in *fallbacks*; first match wins.

    Returns a :class:`DependencyStatus` regardless of whether the binary
    is present. The caller decides whether to abort or merely warn.
    """
    found = shutil.which(name)
    if found is not None:
        logger.debug("Found %s on PATH at %s", name, found)
        return DependencyStatus(
            name=name,
            installed=True,
            path=found,
            version=read_version(found) if check_version else None,
        )

    for candidate in fallbacks:
        if candidate.is_file():
            logger.debug("Found %s in fallback location %s", name, candidate)
            return DependencyStatus(
                name=name,
                installed=True,
                path=str(candidate),
                version=read_version(candidate) if check_version else None,
            )

    logger.debug("%s not found", name)
    return DependencyStatus(name=name, installed=False)
