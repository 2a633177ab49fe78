"""Command line interface for ClipFinder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from clipfinder.config import AppConfig
from clipfinder.ingestion.history_loader import HistoryLoadError, load_history
from clipfinder.search.matcher import Matcher
from clipfinder.search.ranker import Ranker


console = Console()
app = typer.Typer(help="ClipFinder - search your clipboard history")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _format_ranges(ranges) -> str:
    return ", ".join(f"{item.start}+{item.length}" for item in ranges) or "-"


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text (empty lists everything)"),
    history: Path = typer.Option(None, "--history", help="Clipboard history JSON export"),
    fuzzy: Optional[bool] = typer.Option(
        None, "--fuzzy/--no-fuzzy", help="Enable subsequence, path and source app matching"
    ),
    limit: int = typer.Option(AppConfig().limit, min=0, help="Number of results to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search a clipboard history export."""
    _setup_logging(verbose)
    config = AppConfig.from_env()
    if history is not None:
        config.history_path = history
    if fuzzy is not None:
        config.fuzzy_enabled = fuzzy
    resolved = config.resolve_history_path(Path.cwd())

    if not resolved.exists():
        raise typer.BadParameter(f"History file not found: {resolved}")

    try:
        records = load_history(resolved)
    except HistoryLoadError as exc:
        raise typer.BadParameter(str(exc)) from exc

    results = Ranker().search(query, records, config.fuzzy_enabled)
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Match")
    table.add_column("Field")
    table.add_column("Copied")
    table.add_column("App")
    table.add_column("Preview")

    for result in results[:limit]:
        record = result.record
        table.add_row(
            result.match_type.value,
            result.match_field.value,
            record.timestamp.strftime("%Y-%m-%d %H:%M"),
            record.source_app or "",
            record.preview[: config.preview_chars],
        )

    console.print(table)
    if len(results) > limit:
        console.print(f"[dim]{len(results) - limit} more results not shown.[/dim]")


@app.command()
def match(
    query: str = typer.Argument(..., help="Query text"),
    text: str = typer.Argument(..., help="Text to match against"),
    fuzzy: bool = typer.Option(False, "--fuzzy/--no-fuzzy", help="Allow subsequence matches"),
) -> None:
    """Match a query against a single piece of text."""
    result = Matcher().match(query, text, fuzzy)
    if result is None:
        console.print("[yellow]No match.[/yellow]")
        raise typer.Exit(code=1)

    console.print(f"Category: [bold]{result.category.value}[/bold]")
    console.print(f"Type: {result.match_type.value}")
    console.print(f"Score: {result.score:.4f}")
    console.print(f"Ranges: {_format_ranges(result.ranges)}")
