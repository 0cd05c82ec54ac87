# ABOUTME: The `bookshelf add` and `bookshelf new` commands for creating book notes.
# ABOUTME: `add` fills the note from an Open Library work; `new` builds it from command-line fields.

from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console

from bookshelf import BookshelfError
from bookshelf.cli.commands.search_cmd import build_client
from bookshelf.cli.options import open_writer, settings_option, vault_option
from bookshelf.core.writer import BookNoteWriter
from bookshelf.models.book import Book
from bookshelf.settings import BookshelfSettings

console = Console()


def _create(writer: BookNoteWriter, settings: BookshelfSettings, book: Book) -> None:
    book = replace(book, status=settings.default_status)
    try:
        path = writer.create_note(book)
    except BookshelfError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    console.print(f"Created [bold]{book.title}[/bold] at [cyan]{path}[/cyan]")


@click.command("add")
@click.argument("work_key")
@vault_option
@settings_option
def add(work_key: str, vault_path: Path | None, settings_path: Path | None) -> None:
    """Create a note for an Open Library work (e.g. OL45804W)."""
    writer, settings = open_writer(vault_path, settings_path)
    client = build_client(settings)

    try:
        book = client.get_book_details(work_key)
    except (BookshelfError, ValueError) as exc:
        console.print(f"[red]Could not fetch {work_key}:[/red] {exc}")
        raise SystemExit(1) from exc

    _create(writer, settings, book)


@click.command("new")
@click.argument("title")
@click.option("-a", "--author", "authors", multiple=True, help="Author name (repeatable).")
@click.option("-p", "--pages", type=click.IntRange(min=0), default=None, help="Total pages.")
@click.option("--publisher", default=None, help="Publisher name.")
@click.option("--isbn", default=None, help="ISBN-10 or ISBN-13.")
@click.option("-c", "--category", "categories", multiple=True, help="Category (repeatable).")
@vault_option
@settings_option
def new(
    title: str,
    authors: tuple[str, ...],
    pages: int | None,
    publisher: str | None,
    isbn: str | None,
    categories: tuple[str, ...],
    vault_path: Path | None,
    settings_path: Path | None,
) -> None:
    """Create a note for a book that is not in the catalog."""
    writer, settings = open_writer(vault_path, settings_path)
    clean_isbn = isbn.replace("-", "").replace(" ", "") if isbn else None
    book = Book(
        title=title,
        author=list(authors),
        total_pages=pages,
        publisher=publisher,
        isbn10=clean_isbn if clean_isbn and len(clean_isbn) == 10 else None,
        isbn13=clean_isbn if clean_isbn and len(clean_isbn) == 13 else None,
        category=list(categories),
    )
    _create(writer, settings, book)
