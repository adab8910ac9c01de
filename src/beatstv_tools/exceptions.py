"""Custom exception hierarchy for beatstv-tools.

All exceptions that cross layer boundaries must inherit from
:class:`BeatsTvToolsError`.  Raw third-party exceptions (``requests``,
``json``, ``sqlite3``, ``OSError``) must NEVER propagate beyond the
infrastructure layer — they are caught and re-raised as a typed
subclass defined here.

Hierarchy
---------
BeatsTvToolsError
├── NotFoundError
│   ├── ApiKeyMissingError
│   └── AssetNotFoundError
├── NetworkError
├── DecodeError
├── FilesystemError
│   └── ExtractionError
├── UnsupportedPlatformError
├── UnsupportedDependencyError
└── CacheStoreError
"""

from __future__ import annotations


class BeatsTvToolsError(Exception):
    """Base exception for all beatstv-tools errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Missing things the user can provide --------------------------------

class NotFoundError(BeatsTvToolsError):
    """Raised when something required is absent and the user can fix it."""


class ApiKeyMissingError(NotFoundError):
    """Raised when no TMDB API key is configured."""


class AssetNotFoundError(NotFoundError):
    """Raised when a release has no downloadable asset for this platform."""


# --- Remote services ------------------------------------------------------

class NetworkError(BeatsTvToolsError):
    """Raised on connection failures and non-success HTTP statuses."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code: int | None = status_code
        self.url: str | None = url


class DecodeError(BeatsTvToolsError):
    """Raised when a response body cannot be decoded into the expected shape."""


# --- Local filesystem -----------------------------------------------------

class FilesystemError(BeatsTvToolsError):
    """Raised when creating, moving or writing local files fails."""


class ExtractionError(FilesystemError):
    """Raised when a downloaded archive cannot be extracted."""


# --- Installer scope ------------------------------------------------------

class UnsupportedPlatformError(BeatsTvToolsError):
    """Raised when auto-install is attempted on a platform other than Windows."""


class UnsupportedDependencyError(BeatsTvToolsError):
    """Raised when auto-install is requested for an unknown dependency."""


# --- Metadata cache -------------------------------------------------------

class CacheStoreError(BeatsTvToolsError):
    """Raised by cache repositories when the backing store fails."""
