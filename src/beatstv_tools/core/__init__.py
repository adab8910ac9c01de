"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No network I/O and no direct filesystem access.
* No imports from ``cli`` or ``infra``.
* Collaborators arrive through the protocols in :mod:`.protocols`.
"""

from beatstv_tools.core.dependency_checker import REQUIRED_DEPENDENCIES, DependencyChecker
from beatstv_tools.core.metadata_service import MetadataService
from beatstv_tools.core.models import (
    CachedMovie,
    DependencyCheckResult,
    DependencyStatus,
    InstallEvent,
    MovieDetails,
    MovieSearchResult,
    Settings,
)
from beatstv_tools.core.movie_cache import cache_movie_details, cached_row_to_details
from beatstv_tools.core.protocols import (
    InstallNotifier,
    MovieCacheRepository,
    MovieDatabaseClient,
    PlatformDependencyResolver,
    SettingsRepository,
)
from beatstv_tools.core.titles import clean_title, extract_year

__all__: list[str] = [
    "REQUIRED_DEPENDENCIES",
    "CachedMovie",
    "DependencyCheckResult",
    "DependencyChecker",
    "DependencyStatus",
    "InstallEvent",
    "InstallNotifier",
    "MetadataService",
    "MovieCacheRepository",
    "MovieDatabaseClient",
    "MovieDetails",
    "MovieSearchResult",
    "PlatformDependencyResolver",
    "Settings",
    "SettingsRepository",
    "cache_movie_details",
    "cached_row_to_details",
    "clean_title",
    "extract_year",
]
