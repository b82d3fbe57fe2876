"""Shared console helpers for the Spay service creator.

All user-facing output goes through the single Rich ``console`` defined
here so that tests can capture it and colours stay consistent.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Stage headers
# ---------------------------------------------------------------------------

STAGE_TITLES: dict[str, str] = {
    "fetch": "Cloning template",
    "strip-history": "Removing template history",
    "customize": "Customizing template",
    "git-init": "Initializing Git repository",
}


def print_stage_header(stage: str) -> None:
    """Print a rule announcing a materialization stage."""
    title = STAGE_TITLES.get(stage, stage)
    console.print()
    console.print(Rule(f"[bold blue]{title}[/bold blue]", style="blue"))


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="dim", no_wrap=True)
    table.add_column("Value", style="green")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message on a single line."""
    console.print(f"[bold red]{message}[/bold red]", soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a yellow warning message on a single line."""
    console.print(f"[bold yellow]{message}[/bold yellow]", soft_wrap=True)


def print_hint(message: str) -> None:
    """Print an informational hint such as a suggested or derived value."""
    console.print(f"[cyan]Hint:[/cyan] {message}")


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def write_file(path: Path, content: str) -> None:
    """Create parent directories and write *content* as UTF-8."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
