"""``beatstv-tools doctor`` — environment diagnostics command.

Runs the dependency check and renders a Rich table summarising whether
the external binaries the player needs are available.

This module lives in the CLI layer — it may import from ``infra`` and
``core``, and it renders via Rich.  No business logic resides here; it
purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform

from rich.table import Table

from beatstv_tools.cli import exit_codes
from beatstv_tools.cli.console import console
from beatstv_tools.core.dependency_checker import DependencyChecker
from beatstv_tools.core.models import DependencyCheckResult, DependencyStatus
from beatstv_tools.infra.platform_resolver import select_platform_resolver
from beatstv_tools.version import __version__


# ---------------------------------------------------------------------------
# Row builders
# ---------------------------------------------------------------------------

def _dependency_row(status: DependencyStatus) -> tuple[str, str, str, str]:
    """Return (name, path, version, status) for one dependency."""
    if status.installed:
        return (
            status.name,
            status.path or "found",
            status.version or "unknown",
            "[green]OK[/green]",
        )
    return status.name, "not found", "-", "[red]MISSING[/red]"


def _os_description() -> str:
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    return f"{system_display} {platform.release()} ({platform.machine()})"


def _build_table(result: DependencyCheckResult) -> Table:
    table = Table(
        title=f"beatstv-tools {__version__} doctor",
        caption=_os_description(),
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Dependency", style="bold", min_width=10)
    table.add_column("Path", min_width=20)
    table.add_column("Version")
    table.add_column("Status", justify="center", min_width=8)

    for status in result.dependencies:
        table.add_row(*_dependency_row(status))
    return table


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(checker: DependencyChecker | None = None) -> int:
    """Check dependencies and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when every dependency is present,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    if checker is None:
        checker = DependencyChecker(select_platform_resolver())
    result = checker.check_dependencies()

    console.print()
    console.print(_build_table(result))
    console.print()

    if result.all_satisfied:
        console.print("[bold green]All dependencies found.[/bold green]")
        return exit_codes.SUCCESS

    if result.install_instructions:
        console.print(result.install_instructions, markup=False, highlight=False)
        console.print()
    if result.platform == "windows":
        console.print(
            "[dim]Run [bold]beatstv-tools install[/bold] to download "
            "missing dependencies automatically.[/dim]",
        )
    console.print("[bold red]Some dependencies are missing.[/bold red]")
    return exit_codes.GENERAL_ERROR
