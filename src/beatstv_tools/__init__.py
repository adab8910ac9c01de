"""beatstv-tools — dependency checks and movie metadata for Beats TV.

Locates (and on Windows auto-installs) the external media binaries the
player shells out to, and looks up TMDB metadata with a local cache.
"""

from beatstv_tools.version import __version__

__all__: list[str] = ["__version__"]
