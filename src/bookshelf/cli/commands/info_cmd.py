# ABOUTME: The `bookshelf info` command for displaying a book note.
# ABOUTME: Shows the metadata fields and the logged reading sessions.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from bookshelf import BookshelfError
from bookshelf.cli.options import open_writer, resolve_note, settings_option, vault_option
from bookshelf.notes.history import sort_sessions

console = Console()


@click.command("info")
@click.argument("note")
@vault_option
@settings_option
def info(note: str, vault_path: Path | None, settings_path: Path | None) -> None:
    """Show metadata and reading history for NOTE (a title or a .md path)."""
    writer, settings = open_writer(vault_path, settings_path)
    path = resolve_note(settings, note)

    try:
        book_note = writer.read_note(path)
    except BookshelfError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc

    book = book_note.book
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("Title", book.title)
    if book.subtitle:
        table.add_row("Subtitle", book.subtitle)
    table.add_row("Author", book.authors_display or "unknown")
    if book.publisher:
        table.add_row("Publisher", book.publisher)
    if book.publish_date:
        table.add_row("Published", book.publish_date)
    isbns = " ".join(isbn for isbn in (book.isbn10, book.isbn13) if isbn)
    if isbns:
        table.add_row("ISBN", isbns)
    if book.category:
        table.add_row("Category", ", ".join(book.category))
    table.add_row("Status", book.status)
    pages = f"{book.read_page}/{book.total_pages}" if book.total_pages else str(book.read_page)
    table.add_row("Pages", pages)
    if book.read_started:
        table.add_row("Started", book.read_started)
    if book.read_finished:
        table.add_row("Finished", book.read_finished)
    table.add_row("Created", book.created)
    table.add_row("Updated", book.updated)
    table.add_row("Note", book_note.path)
    console.print(table)

    if not book_note.sessions:
        console.print("\n[dim]No reading sessions yet.[/dim]")
        return

    sessions = Table(title="Reading History")
    sessions.add_column("Date")
    sessions.add_column("Pages", justify="right")
    sessions.add_column("Read", justify="right")
    sessions.add_column("Notes", style="dim")
    for session in sort_sessions(book_note.sessions):
        sessions.add_row(
            session.date,
            f"{session.start_page}-{session.end_page}",
            str(session.pages_read),
            session.notes or "",
        )
    console.print(sessions)
