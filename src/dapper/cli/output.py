#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/cli/output.py
"""Console output helpers for the dapper CLI."""

from __future__ import annotations

import sys
from typing import Any, TextIO


def should_use_rich_output(rich_requested: bool, stream: TextIO | None = None) -> bool:
    """Determine if rich output should be used.

    Rich output is used only when ``--rich`` was given and ``stream``
    (stderr by default) is a terminal.

    Parameters
    ----------
    rich_requested : bool
        Whether ``--rich`` was given
    stream : TextIO, optional
        Stream the summary is written to

    Returns
    -------
    bool
        True if the summary should be rendered with rich

    """
    if not rich_requested:
        return False

    target = stream or sys.stderr
    isatty = getattr(target, "isatty", None)
    if not callable(isatty):
        return False
    try:
        return bool(isatty())
    except ValueError:
        # closed stream
        return False


def format_summary_line(total_files: int, changed_files: int, elapsed: float) -> str:
    """Return the one-line run summary.

    Examples
    --------
        >>> format_summary_line(3, 1, 0.25)
        'Formatted 3 files (1 changed) in 0.25 seconds.'
        >>> format_summary_line(3, 0, 0.25)
        'Formatted 3 files in 0.25 seconds.'

    """
    sentence = f"Formatted {total_files} files"
    if changed_files:
        sentence += f" ({changed_files} changed)"
    return f"{sentence} in {elapsed:.2f} seconds."


class SummaryRenderer:
    """Render the end-of-run summary in rich or plain text.

    Parameters
    ----------
    use_rich : bool
        Whether to render a rich table instead of a plain line
    stream : TextIO, optional
        Destination, stderr by default

    Examples
    --------
    >>> renderer = SummaryRenderer(use_rich=False)
    >>> renderer.render_run_summary(total=3, changed=1, failed=0, elapsed=0.12)

    """

    def __init__(self, use_rich: bool, stream: TextIO | None = None):
        """Initialize summary renderer."""
        self.use_rich = use_rich
        self.stream = stream or sys.stderr
        self._console: Any = None

        if self.use_rich:
            from rich.console import Console

            self._console = Console(file=self.stream)

    def render_run_summary(self, total: int, changed: int, failed: int, elapsed: float) -> None:
        """Render the summary of a formatting run.

        Parameters
        ----------
        total : int
            Number of files formatted
        changed : int
            Number of files whose formatting changed
        failed : int
            Number of files that could not be formatted
        elapsed : float
            Wall-clock seconds for the run

        """
        if self.use_rich and self._console:
            from rich.table import Table

            table = Table(title="Formatting Summary")
            table.add_column("Status", style="cyan", no_wrap=True)
            table.add_column("Count", style="magenta")

            table.add_row("Unchanged", str(total - changed - failed))
            table.add_row("Changed", str(changed))
            table.add_row("Failed", str(failed))
            table.add_row("Total", str(total))

            self._console.print(table)
            self._console.print(f"Done in {elapsed:.2f} seconds.")
        else:
            print(format_summary_line(total, changed, elapsed), file=self.stream)


__all__ = ["SummaryRenderer", "format_summary_line", "should_use_rich_output"]
