"""Reference search and scrape commands."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import Config
from ..errors import BlogRefreshError
from ..ingestion import ContentExtractor
from ..search import ReferenceSearch

console = Console()


def search_command(
    query: str = typer.Argument(..., help="Search query, usually an article title"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Search for reference articles."""
    try:
        config = Config(config_path)
        results = ReferenceSearch(config.config.search).search(query)
    except BlogRefreshError as e:
        console.print(f"[red]❌ Search failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not results:
        console.print("[yellow]No qualifying references found.[/yellow]")
        return

    table = Table(title=f"References for {escape(query)}")
    table.add_column("Title", style="cyan")
    table.add_column("URL", style="blue")
    for ref in results:
        table.add_row(escape(ref.title), ref.url)
    console.print(table)


def scrape_command(
    url: str = typer.Argument(..., help="Page to extract"),
    as_html: bool = typer.Option(False, "--html", help="Print cleaned HTML instead of text"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Extract the main content of a page."""
    try:
        config = Config(config_path)
        content = ContentExtractor(config.config.extractor).scrape(url, output="html" if as_html else "text")
    except BlogRefreshError as e:
        console.print(f"[red]❌ Scrape failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(content, markup=False, highlight=False)
    console.print(f"\n[dim]{len(content)} characters[/dim]")
