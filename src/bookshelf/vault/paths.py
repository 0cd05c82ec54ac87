# ABOUTME: Vault-relative path conventions for book notes.
# ABOUTME: Derives a safe, bounded note file name from a book title.

import re
from pathlib import PurePosixPath

MAX_FILE_NAME_LENGTH = 100
UNTITLED_FILE_NAME = "Untitled Book"
BOOKS_SUBFOLDER = "Books"

_ILLEGAL_CHARS_RE = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE_RE = re.compile(r"\s+")


def note_file_name(title: str) -> str:
    """Turn a title into a file name stem.

    Strips characters that are illegal in paths, collapses whitespace, and
    caps the length. Falls back to "Untitled Book" when nothing is left.
    """
    name = _ILLEGAL_CHARS_RE.sub("", title or "")
    name = _WHITESPACE_RE.sub(" ", name).strip()
    if len(name) > MAX_FILE_NAME_LENGTH:
        name = name[:MAX_FILE_NAME_LENGTH].strip()
    return name or UNTITLED_FILE_NAME


def books_folder(base_folder: str) -> str:
    """Folder holding the book notes, relative to the vault root."""
    return str(PurePosixPath(base_folder) / BOOKS_SUBFOLDER)


def note_path(base_folder: str, title: str) -> str:
    """Vault-relative path of the note for a book with this title."""
    return str(PurePosixPath(books_folder(base_folder)) / f"{note_file_name(title)}.md")
