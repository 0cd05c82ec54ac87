# ABOUTME: The `bookshelf progress` command for logging a reading session.
# ABOUTME: Appends to the note's Reading History and updates page, status, and timestamps.

from pathlib import Path

import click
from rich.console import Console

from bookshelf import BookshelfError
from bookshelf.cli.options import open_writer, resolve_note, settings_option, vault_option

console = Console()


@click.command("progress")
@click.argument("note")
@click.argument("end_page", type=click.IntRange(min=0))
@click.option("-s", "--start", "start_page", type=click.IntRange(min=0), default=None,
              help="Start page (default: where the last session ended).")
@click.option("-n", "--notes", default=None, help="Notes for this session.")
@click.option("--auto-status/--no-auto-status", default=None,
              help="Override the auto status change setting.")
@vault_option
@settings_option
def progress(
    note: str,
    end_page: int,
    start_page: int | None,
    notes: str | None,
    auto_status: bool | None,
    vault_path: Path | None,
    settings_path: Path | None,
) -> None:
    """Record reading up to END_PAGE for NOTE (a title or a vault-relative .md path)."""
    writer, settings = open_writer(vault_path, settings_path)
    if settings.require_reading_notes and not (notes and notes.strip()):
        console.print("[red]Session notes are required (require_reading_notes is on).[/red]")
        raise SystemExit(1)
    path = resolve_note(settings, note)

    try:
        session = writer.record_progress(
            path,
            end_page,
            start_page=start_page,
            notes=notes,
            auto_status_change=auto_status,
        )
        book = writer.read_note(path).book
    except BookshelfError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc

    console.print(
        f"Logged pages {session.start_page}-{session.end_page} "
        f"([bold]{session.pages_read}[/bold] read) for [bold]{book.title}[/bold]."
    )
    total = f"/{book.total_pages}" if book.total_pages else ""
    console.print(f"Now at page {book.read_page}{total}, status [cyan]{book.status}[/cyan].")
