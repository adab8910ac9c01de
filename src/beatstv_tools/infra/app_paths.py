"""Well-known application locations."""

from __future__ import annotations

import sys
from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "open-tv"
APP_AUTHOR = "fredol"
DATABASE_FILENAME = "beatstv.db"
DEPS_DIRNAME = "deps"


def executable_dir() -> Path:
    """Directory containing the running executable (the app bundle when frozen)."""
    return Path(sys.executable).resolve().parent


def default_install_dir() -> Path:
    """The ``deps`` folder beside the executable, where bundled binaries live."""
    return executable_dir() / DEPS_DIRNAME


def data_dir() -> Path:
    return Path(user_data_dir(APP_NAME, APP_AUTHOR))


def default_database_path() -> Path:
    return data_dir() / DATABASE_FILENAME


def is_first_run(database_path: Path | None = None) -> bool:
    """True until the application database has been created."""
    path = database_path if database_path is not None else default_database_path()
    return not path.exists()
