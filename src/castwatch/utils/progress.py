"""Rich progress bar and scan summary utilities."""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.table import Table

console = Console()


def create_progress(disable: bool = False) -> Progress:
    """Return a Rich Progress bar with informative columns.

    Usage::

        with create_progress() as progress:
            task = progress.add_task("Fetching credits", total=len(premieres))
            for premiere in premieres:
                fetch(premiere)
                progress.advance(task)
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=40),
        TaskProgressColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        TimeRemainingColumn(),
        console=console,
        transient=False,
        disable=disable,
    )


def log_summary(
    documents: int,
    new_matches: int,
    duplicates: int,
    failed: int,
    by_type: dict[str, int] | None = None,
) -> None:
    """Print a summary table of one scan session.

    Args:
        documents: Articles or premieres scanned.
        new_matches: Records emitted for pairs not seen before.
        duplicates: Findings discarded because the pair was already seen.
        failed: Findings that could not be persisted.
        by_type: Optional match-type breakdown of *new_matches*.
    """
    table = Table(title="Scan Summary", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Documents", f"{documents}")
    table.add_row("New matches", f"[green]{new_matches}[/green]")
    table.add_row("Duplicates", f"[yellow]{duplicates}[/yellow]" if duplicates else f"{duplicates}")
    table.add_row("Failed", f"[red]{failed}[/red]" if failed else f"{failed}")
    for match_type, count in (by_type or {}).items():
        table.add_row(f"  {match_type}", f"{count}")

    console.print()
    console.print(table)
    console.print()
