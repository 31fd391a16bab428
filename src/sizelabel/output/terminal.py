"""Rich terminal reporter — per-file counts and the label delta."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sizelabel.runner import LabelRun


def render(run: LabelRun, *, console: Optional[Console] = None) -> None:
    """Print a labeler run to the terminal using Rich."""
    console = console or Console(stderr=True)

    if run.skipped:
        console.print("[dim]Event action not handled — nothing to do.[/dim]")
        return

    analysis = run.analysis
    if analysis is not None and analysis.per_file:
        table = Table(
            title="Counted Files",
            title_style="bold",
            border_style="dim",
        )
        table.add_column("File", style="magenta")
        table.add_column("Characters", justify="right", style="green")
        for item in analysis.per_file:
            table.add_row(escape(item.path), str(item.delta))
        console.print(table)

    if analysis is not None:
        console.print(f"[dim]Files in diff:[/dim]   {analysis.files_seen}")
        console.print(f"[dim]Files counted:[/dim]   {analysis.counted_files}")
        console.print(f"[dim]Characters:[/dim]      {analysis.total}")
        console.print(f"[dim]Markdown edited:[/dim] {'yes' if analysis.touched_stable_markdown else 'no'}")
    console.print(f"[dim]Size label:[/dim]      {run.size_label or '-'}")

    console.print()
    if run.delta.is_empty:
        console.print("[bold green]✓ Correct labels already assigned.[/bold green]")
        return
    for name in run.delta.add:
        console.print(f"  [green]+ {escape(name)}[/green]")
    for name in run.delta.remove:
        suffix = " [yellow](failed, ignored)[/yellow]" if name in run.failed_removals else ""
        console.print(f"  [red]- {escape(name)}[/red]{suffix}")
    if not run.applied:
        console.print("[dim]Labels not applied.[/dim]")
