"""CLI console and logging setup.

Every CLI module renders through the single stderr :data:`console` so
that progress bars, tables and log lines interleave cleanly.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)


def get_rich_console() -> Console:
    """Return the shared stderr console."""
    return console


def configure_logging(verbose: bool = False) -> None:
    """Route library logging through Rich.

    ``verbose`` lowers the threshold from WARNING to DEBUG.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
