"""CLI UI components (Rich).

Why separate:
- Keeps command functions free of rendering details.
- Result lines are echoed verbatim; only diagnostics use Rich formatting.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from kontroll.core.domain.models import Outcome


def print_outcome(outcome: Outcome, err_console: Console) -> None:
    """Print success lines to stdout, or the single failure line to stderr."""

    if outcome.success:
        for line in outcome.lines:
            typer.echo(line)
        return
    # Plain Text: no markup or emoji substitution.
    err_console.print(Text(outcome.message or "Unknown error", style="red"), soft_wrap=True)


def build_doctor_table() -> Table:
    table = Table(title="kontroll doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
