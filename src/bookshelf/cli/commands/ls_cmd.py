# ABOUTME: The `bookshelf ls` command for listing tracked books.
# ABOUTME: Displays a table of notes with status and progress, optionally filtered by status.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from bookshelf import BookshelfError
from bookshelf.cli.options import open_writer, settings_option, vault_option
from bookshelf.models.book import BOOK_STATUSES

console = Console()


@click.command("ls")
@click.option("--status", type=click.Choice(BOOK_STATUSES), default=None,
              help="Only show books with this status.")
@vault_option
@settings_option
def ls(status: str | None, vault_path: Path | None, settings_path: Path | None) -> None:
    """List tracked books."""
    writer, _ = open_writer(vault_path, settings_path)

    try:
        notes = writer.list_notes()
    except BookshelfError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc

    if status:
        notes = [note for note in notes if note.book.status == status]

    if not notes:
        console.print("[yellow]No books found.[/yellow]")
        return

    table = Table()
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Status", style="cyan")
    table.add_column("Progress", justify="right")

    for note in sorted(notes, key=lambda n: n.book.title.lower()):
        book = note.book
        progress = book.progress
        shown = f"{progress:.0%}" if progress is not None else str(book.read_page)
        table.add_row(book.title, book.authors_display or "unknown", book.status, shown)

    console.print(table)
    console.print(f"\n[dim]{len(notes)} book(s)[/dim]")
