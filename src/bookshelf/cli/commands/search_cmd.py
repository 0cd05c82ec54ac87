# ABOUTME: The `bookshelf search` command for querying the Open Library catalog.
# ABOUTME: Displays matching works with the key needed by `bookshelf add`.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from bookshelf import BookshelfError
from bookshelf.catalog.http import CatalogHttpClient
from bookshelf.catalog.openlibrary import OpenLibraryClient
from bookshelf.cli.options import settings_option
from bookshelf.settings import BookshelfSettings, load_settings

console = Console()


def build_client(settings: BookshelfSettings) -> OpenLibraryClient:
    http_client = CatalogHttpClient(timeout=settings.api_timeout)
    return OpenLibraryClient(http_client, search_limit=settings.search_result_limit)


@click.command("search")
@click.argument("query")
@settings_option
@click.option("-n", "--limit", type=click.IntRange(1, 100), default=None, help="Maximum results.")
def search(query: str, settings_path: Path | None, limit: int | None) -> None:
    """Search Open Library for books matching QUERY."""
    settings = load_settings(settings_path)
    client = build_client(settings)

    try:
        hits = client.search(query, limit=limit)
    except BookshelfError as exc:
        console.print(f"[red]Search failed:[/red] {exc}")
        raise SystemExit(1) from exc

    if not hits:
        console.print(f"[yellow]No books found for '{query}'.[/yellow]")
        return

    table = Table()
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Year", style="dim")
    table.add_column("Pages", justify="right")
    table.add_column("Work", style="cyan")

    for hit in hits:
        book = hit.book
        table.add_row(
            book.title,
            book.authors_display or "unknown",
            book.publish_date or "",
            str(book.total_pages) if book.total_pages is not None else "",
            hit.work_key.rsplit("/", 1)[-1],
        )

    console.print(table)
