"""Rich-based progress display driven by installer events.

This module bridges the installer's notifier callback with a Rich
:class:`~rich.progress.Progress` bar.  The infra layer only emits
:class:`~beatstv_tools.core.models.InstallEvent` values; rendering
happens here.

Design
------
* One Rich task per dependency display name, scaled 0–100.
* :meth:`RichInstallProgress.__call__` is the notifier handed to
  :class:`~beatstv_tools.infra.auto_installer.AutoInstaller`.
* Shutdown-safe: if the progress bar is already stopped, events are
  silently ignored.
"""

from __future__ import annotations

from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
)

from beatstv_tools.cli.console import get_rich_console
from beatstv_tools.core.models import InstallEvent

_STATUS_LABELS: dict[str, str] = {
    "downloading": "Downloading",
    "extracting": "Extracting",
    "complete": "Installed",
}


class RichInstallProgress:
    """Callable install-notifier adapter for Rich.

    Usage::

        with RichInstallProgress() as progress:
            AutoInstaller(progress).install("ffmpeg")
    """

    def __init__(self) -> None:
        self._progress: Progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=get_rich_console(),
            transient=False,
        )
        self._tasks: dict[str, TaskID] = {}
        self._started: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> RichInstallProgress:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the Rich progress display."""
        if not self._started:
            self._progress.start()
            self._started = True

    def stop(self) -> None:
        """Stop the Rich progress display (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False

    # ------------------------------------------------------------------
    # Notifier callback
    # ------------------------------------------------------------------

    def __call__(self, event: InstallEvent) -> None:
        if not self._started:
            return

        description = f"{_STATUS_LABELS.get(event.status, event.status)} {event.name}"
        task_id = self._tasks.get(event.name)
        if task_id is None:
            task_id = self._progress.add_task(description, total=100)
            self._tasks[event.name] = task_id

        self._progress.update(task_id, description=description, completed=event.progress)
