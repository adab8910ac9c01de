"""Allow ``python -m beatstv_tools`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m beatstv_tools`` behaves identically to the
``beatstv-tools`` console script.
"""

from __future__ import annotations

from beatstv_tools.cli.app import cli

if __name__ == "__main__":
    cli()
