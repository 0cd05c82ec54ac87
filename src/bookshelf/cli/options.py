# ABOUTME: Shared Click options and helpers for Bookshelf CLI commands.
# ABOUTME: Provides --vault/--settings decorators and builds the note writer they point at.

from pathlib import Path

import click

from bookshelf.core.writer import BookNoteWriter
from bookshelf.settings import DEFAULT_SETTINGS_PATH, BookshelfSettings, load_settings
from bookshelf.vault.paths import note_path
from bookshelf.vault.storage import DEFAULT_VAULT_PATH, FileSystemStorage

vault_option = click.option(
    "--vault",
    "vault_path",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="BOOKSHELF_VAULT",
    default=None,
    help=f"Vault root folder (default: {DEFAULT_VAULT_PATH})",
)

settings_option = click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="BOOKSHELF_SETTINGS",
    default=None,
    help=f"Settings JSON file (default: {DEFAULT_SETTINGS_PATH})",
)


def open_writer(
    vault_path: Path | None, settings_path: Path | None
) -> tuple[BookNoteWriter, BookshelfSettings]:
    """Load settings and build a writer over the vault folder."""
    settings = load_settings(settings_path)
    root = vault_path or DEFAULT_VAULT_PATH
    root.mkdir(parents=True, exist_ok=True)
    return BookNoteWriter(FileSystemStorage(root), settings), settings


def resolve_note(settings: BookshelfSettings, note: str) -> str:
    """Accept a vault-relative .md path or a book title and return the note path."""
    if note.endswith(".md"):
        return note
    return note_path(settings.book_folder, note)
