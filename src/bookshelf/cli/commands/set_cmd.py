# ABOUTME: The `bookshelf set` command for editing a book note's metadata fields.
# ABOUTME: Rewrites the front matter only; the note body is left untouched.

from pathlib import Path
from typing import Any

import click
from rich.console import Console

from bookshelf import BookshelfError
from bookshelf.cli.options import open_writer, resolve_note, settings_option, vault_option
from bookshelf.models.book import BOOK_STATUSES

console = Console()


@click.command("set")
@click.argument("note")
@click.option("--status", type=click.Choice(BOOK_STATUSES), default=None)
@click.option("--total", "total_pages", type=click.IntRange(min=0), default=None,
              help="Total pages.")
@click.option("--page", "read_page", type=click.IntRange(min=0), default=None,
              help="Current page.")
@click.option("--title", default=None)
@click.option("--subtitle", default=None)
@click.option("--publisher", default=None)
@click.option("-a", "--author", "authors", multiple=True, help="Replace authors (repeatable).")
@vault_option
@settings_option
def set_fields(
    note: str,
    authors: tuple[str, ...],
    vault_path: Path | None,
    settings_path: Path | None,
    **fields: Any,
) -> None:
    """Edit metadata fields of NOTE (a title or a vault-relative .md path)."""
    writer, settings = open_writer(vault_path, settings_path)
    path = resolve_note(settings, note)

    changes = {name: value for name, value in fields.items() if value is not None}
    if authors:
        changes["author"] = list(authors)
    if not changes:
        console.print("[yellow]Nothing to change.[/yellow]")
        return

    try:
        book = writer.update_fields(path, **changes)
    except BookshelfError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc

    console.print(
        f"Updated [bold]{book.title}[/bold]: {', '.join(sorted(changes))}."
    )
