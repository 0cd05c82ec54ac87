# ABOUTME: Note storage protocol and a plain-directory implementation of it.
# ABOUTME: Reads, overwrites, and exclusively creates UTF-8 markdown notes by vault-relative path.

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from bookshelf import BookshelfError

logger = logging.getLogger(__name__)

DEFAULT_VAULT_PATH = Path.home() / "Bookshelf Vault"


class NoteStorageError(BookshelfError):
    """Raised when the storage layer cannot complete a read or write."""


class NoteExistsError(NoteStorageError):
    """Raised when creating a note at a path that is already taken."""


@runtime_checkable
class NoteStorage(Protocol):
    """Protocol for the file operations the note writer needs.

    Paths are vault-relative POSIX strings. No multi-file transactions.
    """

    def read_text(self, path: str) -> str: ...

    def write_text(self, path: str, text: str) -> None: ...

    def create_text(self, path: str, text: str) -> str: ...

    def exists(self, path: str) -> bool: ...

    def ensure_folder(self, path: str) -> None: ...

    def list_notes(self, folder: str) -> list[str]: ...


class FileSystemStorage:
    """NoteStorage backed by a directory on disk (the vault root)."""

    def __init__(self, root: Path) -> None:
        self._root = root.resolve()

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, path: str) -> Path:
        """Map a vault-relative path to disk, refusing paths that escape the root."""
        target = (self._root / path).resolve()
        if target != self._root and self._root not in target.parents:
            raise NoteStorageError(f"Path escapes the vault: {path}")
        return target

    def read_text(self, path: str) -> str:
        try:
            return self._resolve(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise NoteStorageError(f"Could not read {path}: {exc}") from exc

    def write_text(self, path: str, text: str) -> None:
        target = self._resolve(path)
        try:
            target.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise NoteStorageError(f"Could not write {path}: {exc}") from exc
        logger.debug("Wrote %d characters to %s", len(text), path)

    def create_text(self, path: str, text: str) -> str:
        """Create a new note. Returns the path.

        Raises:
            NoteExistsError: If something already exists at path.
        """
        target = self._resolve(path)
        try:
            with target.open("x", encoding="utf-8") as handle:
                handle.write(text)
        except FileExistsError as exc:
            raise NoteExistsError(f"Book note already exists: {path}") from exc
        except OSError as exc:
            raise NoteStorageError(f"Could not create {path}: {exc}") from exc
        logger.debug("Created %s", path)
        return path

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def ensure_folder(self, path: str) -> None:
        """Create a folder (and parents) unless it exists.

        Raises:
            NoteStorageError: If the path exists but is not a folder.
        """
        target = self._resolve(path)
        if target.exists() and not target.is_dir():
            raise NoteStorageError(f"Path exists but is not a folder: {path}")
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise NoteStorageError(f"Could not create folder {path}: {exc}") from exc

    def list_notes(self, folder: str) -> list[str]:
        """Vault-relative paths of the markdown notes directly in folder, sorted."""
        target = self._resolve(folder)
        if not target.is_dir():
            return []
        return sorted(
            note.relative_to(self._root).as_posix()
            for note in target.glob("*.md")
            if note.is_file()
        )
