"""Interactive dependency selection for ``beatstv-tools install``.

This module is responsible for:

* Prompting the user to pick which missing dependencies to install via
  a questionary checkbox.
* Returning the selected dependency names.

All display-related logic lives here — no business logic, no
downloading.
"""

from __future__ import annotations

from collections.abc import Sequence

import questionary

from beatstv_tools.core.models import DependencyStatus


def _build_choice_label(status: DependencyStatus) -> str:
    """Build the single-line label shown in the checkbox list."""
    return f"{status.name:<8} (not found)"


def prompt_dependency_selection(missing: Sequence[DependencyStatus]) -> list[str]:
    """Ask which of the *missing* dependencies to install.

    Every entry starts checked.  Returns an empty list when the user
    cancels (Esc / Ctrl+C) or unchecks everything.
    """
    choices = [
        questionary.Choice(
            title=_build_choice_label(status),
            value=status.name,
            checked=True,
        )
        for status in missing
    ]

    selected: list[str] | None = questionary.checkbox(
        "Select dependencies to install:",
        choices=choices,
    ).ask()  # Returns None on Ctrl+C / Esc

    return list(selected or [])
