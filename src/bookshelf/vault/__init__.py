# ABOUTME: Public API for the note storage layer (the vault of markdown book notes).
# ABOUTME: Exports the storage protocol, the filesystem implementation, errors, and path helpers.

from bookshelf.vault.paths import books_folder, note_file_name, note_path
from bookshelf.vault.storage import (
    DEFAULT_VAULT_PATH,
    FileSystemStorage,
    NoteExistsError,
    NoteStorage,
    NoteStorageError,
)

__all__ = [
    "DEFAULT_VAULT_PATH",
    "FileSystemStorage",
    "NoteExistsError",
    "NoteStorage",
    "NoteStorageError",
    "books_folder",
    "note_file_name",
    "note_path",
]
