"""Article store commands."""

from pathlib import Path
from typing import Optional

import typer
from rich.columns import Columns
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..config import Config
from ..errors import BlogRefreshError, NotFoundError
from ..ingestion import readable_text
from ..models import Article
from ..store import ArticleStoreClient

console = Console()

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Config file")


def open_store(config_path: Optional[Path]) -> ArticleStoreClient:
    """Build a store client from configuration."""
    config = Config(config_path)
    return ArticleStoreClient(config.require_api_base_url(), timeout=config.config.store.timeout)


def originals_command(
    include_updated: bool = typer.Option(
        False,
        "--all",
        help="Include originals that already have an updated version",
    ),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """List original articles waiting for a rewrite."""
    try:
        store = open_store(config_path)
        originals = store.fetch_original_articles(exclude_already_updated=not include_updated)
    except BlogRefreshError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not originals:
        console.print("[yellow]No original articles pending.[/yellow]")
        return

    table = Table(title="Original Articles")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Slug", style="magenta")
    table.add_column("Length", style="green", justify="right")

    for article in originals:
        table.add_row(article.id, escape(article.title), article.slug or "-", str(len(article.content)))

    console.print(table)


def extract_command(
    limit: int = typer.Option(5, "--limit", "-n", help="Number of oldest blog posts to seed", min=1, max=20),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Ask the article store to scrape and seed the oldest blog posts."""
    try:
        store = open_store(config_path)
        result = store.extract_oldest(limit=limit)
    except BlogRefreshError as e:
        console.print(f"[red]❌ Extraction failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(
        f"[green]✅ Extraction done.[/green] saved={result.saved} skipped={result.skipped} "
        f"originals={len(result.originals)}"
    )
    for article in result.originals:
        console.print(f"  • {escape(article.title)} [dim]({article.id})[/dim]")


def _article_panel(article: Optional[Article], side_label: str) -> Panel:
    if article is None:
        return Panel("Not available.", title=side_label, style="dim")

    body = escape(readable_text(article.content)) or "No content."
    links = [r for r in article.references if r.url.strip()]
    if links:
        body += "\n\n[bold]References[/bold]\n" + "\n".join(
            f"• {escape(r.title.strip() or r.url)} [blue]{escape(r.url)}[/blue]" for r in links
        )
    return Panel(body, title=f"{side_label}: {escape(article.title)}", expand=True)


def compare_command(
    article_id: str = typer.Argument(..., help="Id of an original or updated article"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Show an original article next to its updated version."""
    try:
        store = open_store(config_path)
        article = store.get_article(article_id)

        if article.is_updated_version:
            updated = article
            original = None
            if article.original_article_id:
                try:
                    original = store.get_article(article.original_article_id)
                except NotFoundError:
                    original = None
        else:
            original = article
            updated = store.find_derivative(article.id)
    except NotFoundError:
        console.print(f"[red]Article not found: {escape(article_id)}[/red]")
        raise typer.Exit(1)
    except BlogRefreshError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(
        Columns(
            [_article_panel(original, "Original"), _article_panel(updated, "Updated")],
            equal=True,
            expand=True,
        )
    )
