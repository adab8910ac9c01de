"""Infrastructure layer — external system integration.

This layer wraps all interaction with the operating system, the GitHub
release index, TMDB and SQLite.  Every raw third-party exception must
be caught here and re-raised as a
:class:`~beatstv_tools.exceptions.BeatsTvToolsError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from beatstv_tools.infra.auto_installer import AutoInstaller, auto_install_dependency
from beatstv_tools.infra.binary_locator import current_platform, locate_binary, read_version
from beatstv_tools.infra.platform_resolver import (
    MacOSResolver,
    PathOnlyResolver,
    WindowsResolver,
    check_dependencies,
    select_platform_resolver,
)
from beatstv_tools.infra.settings_store import EnvSettingsRepository, StaticSettingsRepository
from beatstv_tools.infra.sqlite_cache import SqliteMovieCache
from beatstv_tools.infra.tmdb_client import TmdbClient

__all__: list[str] = [
    "AutoInstaller",
    "EnvSettingsRepository",
    "MacOSResolver",
    "PathOnlyResolver",
    "SqliteMovieCache",
    "StaticSettingsRepository",
    "TmdbClient",
    "WindowsResolver",
    "auto_install_dependency",
    "check_dependencies",
    "current_platform",
    "locate_binary",
    "read_version",
    "select_platform_resolver",
]
