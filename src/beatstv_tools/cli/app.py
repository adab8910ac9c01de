"""CLI application entry point and command routing for beatstv-tools.

Every command runs behind :func:`cli`, which catches
:class:`~beatstv_tools.exceptions.BeatsTvToolsError`, ``KeyboardInterrupt``
and any unexpected ``Exception``, prints them via Rich and exits with a
well-defined code.

Architecture notes
------------------
* Commands only wire collaborators together; dependency checks, installs
  and lookups live in ``core`` and ``infra``.
* Exit codes are decided here and nowhere else.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

from beatstv_tools.cli import exit_codes
from beatstv_tools.cli.console import configure_logging, console
from beatstv_tools.exceptions import BeatsTvToolsError
from beatstv_tools.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``beatstv-tools doctor``          — dependency diagnostics
    * ``beatstv-tools install [NAME]``  — download missing binaries (Windows)
    * ``beatstv-tools movie TITLE``     — TMDB metadata lookup
    * ``beatstv-tools --version``
    """
    parser = argparse.ArgumentParser(
        prog="beatstv-tools",
        description="Dependency checks and movie metadata for Beats TV.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging.",
    )

    commands = parser.add_subparsers(dest="command")
    commands.add_parser("doctor", help="Check that mpv, ffmpeg and yt-dlp are available.")

    install = commands.add_parser(
        "install", help="Download missing dependencies (Windows only).",
    )
    install.add_argument(
        "names",
        nargs="*",
        metavar="NAME",
        help="Dependencies to install; prompts for missing ones when omitted.",
    )

    movie = commands.add_parser("movie", help="Look up movie metadata on TMDB.")
    movie.add_argument("title", help="Movie or channel title, e.g. 'US| Inception (2010)'.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch (no business logic)
# ---------------------------------------------------------------------------

def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from beatstv_tools.cli.doctor import run_doctor

    return run_doctor()


def _handle_install(names: Sequence[str]) -> int:
    """Install *names*, or the missing dependencies the user picks.

    Flow:
    1. Without names, run a dependency check and prompt for missing ones.
    2. Install each selected dependency with Rich progress.
    """
    from beatstv_tools.cli.install_prompt import prompt_dependency_selection
    from beatstv_tools.cli.progress import RichInstallProgress
    from beatstv_tools.infra.auto_installer import AutoInstaller
    from beatstv_tools.infra.platform_resolver import check_dependencies

    selected = list(names)
    if not selected:
        result = check_dependencies()
        missing = [dep for dep in result.dependencies if not dep.installed]
        if not missing:
            console.print("[bold green]All dependencies are already installed.[/bold green]")
            return exit_codes.SUCCESS
        selected = prompt_dependency_selection(missing)
        if not selected:
            console.print("[yellow]Nothing selected.[/yellow]")
            return exit_codes.SUCCESS

    with RichInstallProgress() as progress:
        installer = AutoInstaller(progress)
        for name in selected:
            installed = installer.install(name)
            if installed is None:
                console.print(
                    f"[yellow]{name} was downloaded but its binary was not found "
                    f"in {installer.install_dir}.[/yellow]",
                )
            else:
                console.print(f"[green]{name}[/green] installed at {installed}")

    return exit_codes.SUCCESS


def _handle_movie(title: str) -> int:
    """Dispatch a cache-first TMDB lookup."""
    from beatstv_tools.cli.movie import run_movie_lookup
    from beatstv_tools.core.metadata_service import MetadataService
    from beatstv_tools.infra.app_paths import default_database_path
    from beatstv_tools.infra.settings_store import EnvSettingsRepository
    from beatstv_tools.infra.sqlite_cache import SqliteMovieCache
    from beatstv_tools.infra.tmdb_client import TmdbClient

    cache = SqliteMovieCache(default_database_path())
    try:
        service = MetadataService(TmdbClient(EnvSettingsRepository()), cache)
        return run_movie_lookup(title, service)
    finally:
        cache.close()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the beatstv-tools CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)
    load_dotenv()

    if args.command == "doctor":
        return _handle_doctor()
    if args.command == "install":
        return _handle_install(args.names)
    return _handle_movie(args.title)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except BeatsTvToolsError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
