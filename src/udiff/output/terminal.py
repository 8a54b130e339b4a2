"""Rich terminal summary — printed to stderr so stdout stays pure diff."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from udiff.diff.models import DiffStats


def render(stats: DiffStats, console: Console | None = None) -> None:
    """Print a summary table of *stats*."""
    console = console or Console(stderr=True)

    console.print()
    table = Table(
        title="udiff summary",
        title_style="bold",
        border_style="dim",
    )
    table.add_column("", style="dim")
    table.add_column("Old", justify="right", style="red")
    table.add_column("New", justify="right", style="green")

    table.add_row("File", stats.old_path, stats.new_path)
    table.add_row("Lines read", str(stats.old_lines), str(stats.new_lines))
    table.add_row("Changed", f"-{stats.deletions}", f"+{stats.insertions}")
    console.print(table)

    console.print(f"[dim]Hunks:[/dim]         {stats.hunks}")
    console.print(f"[dim]Context lines:[/dim] {stats.context_lines}")
    console.print(f"[dim]Peak buffer:[/dim]   {stats.peak_buffered} lines")
    console.print(f"[dim]Duration:[/dim]      {stats.duration_ms:.0f}ms")
    if not stats.headers_patched:
        console.print(
            "[bold yellow]⚠️  Hunk headers left unpatched (?,?) — "
            "a hunk outgrew the lookahead bound or patching was disabled.[/bold yellow]"
        )
    if not stats.changed:
        console.print("[bold green]✅ Files are identical.[/bold green]")
