"""udiff CLI — Typer application: ``udiff FILE1 FILE2``."""

from __future__ import annotations

import itertools
from pathlib import Path
from typing import BinaryIO, Optional

import typer
from rich.console import Console
from rich.markup import escape

from udiff import __version__

app = typer.Typer(
    name="udiff",
    help="Unified diff for huge files in bounded memory.",
    add_completion=False,
)

console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        print(f"udiff {__version__}")
        raise typer.Exit()


def _write_diff(chunks, out: BinaryIO) -> None:
    for chunk in chunks:
        out.write(chunk)
    out.flush()


@app.command()
def main(
    file1: str = typer.Argument(..., metavar="FILE1", help="Old file"),
    file2: str = typer.Argument(..., metavar="FILE2", help="New file"),
    unified: Optional[int] = typer.Option(None, "--unified", "-U", help="Lines of context (default 3)"),
    lookahead: Optional[int] = typer.Option(None, "--lookahead", "-l", help="Max lines searched to resynchronise (default 10000)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .udiff.toml"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the diff to a file instead of stdout"),
    no_patch_headers: bool = typer.Option(False, "--no-patch-headers", help="Leave hunk counts as ?,? (no per-hunk buffering)"),
    exit_code: bool = typer.Option(False, "--exit-code", help="Exit 1 when the files differ"),
    stats: bool = typer.Option(False, "--stats", help="Print a summary to stderr"),
    report: Optional[str] = typer.Option(None, "--report", help="Write a JSON summary to a file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """Compare FILE1 and FILE2 line by line and print a unified diff."""
    from udiff.config.loader import ConfigError, load_config, validate
    from udiff.diff.models import DiffStats
    from udiff.output import json_report, terminal
    from udiff.pipeline import diff_files

    # --- Load config ---
    try:
        cfg = load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if unified is not None:
        cfg.diff.max_context = unified
    if lookahead is not None:
        cfg.diff.max_lookahead = lookahead
    if no_patch_headers:
        cfg.output.patch_headers = False
    if exit_code:
        cfg.output.exit_code = True
    try:
        validate(cfg)
    except ConfigError as exc:
        console.print(f"[bold red]Invalid option:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    if verbose or debug:
        console.print(f"[dim]Context lines: {cfg.diff.max_context}[/dim]")
        console.print(f"[dim]Lookahead: {cfg.diff.max_lookahead}[/dim]")
        console.print(f"[dim]Chunk size: {cfg.diff.chunk_size}[/dim]")
        console.print(f"[dim]Patch headers: {cfg.output.patch_headers}[/dim]")

    # --- Run diff ---
    result = DiffStats()
    chunks = diff_files(file1, file2, cfg, stats=result)
    try:
        # Inputs are stat-ed and opened before the output file is truncated
        chunks = itertools.chain([next(chunks)], chunks)
        if output:
            with open(output, "wb") as out:
                _write_diff(chunks, out)
        else:
            _write_diff(chunks, typer.get_binary_stream("stdout"))
    except OSError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    if debug:
        console.print(f"[dim]Diff duration: {result.duration_ms:.0f}ms[/dim]")
    if verbose and output:
        console.print(f"[dim]Diff written to {output}[/dim]")

    # --- Summaries ---
    if stats:
        terminal.render(result, console)
    if report:
        try:
            Path(report).write_text(json_report.render(result), encoding="utf-8")
        except OSError as exc:
            console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
            raise typer.Exit(code=2) from exc

    # --- Exit code ---
    if cfg.output.exit_code and result.changed:
        raise typer.Exit(code=1)
