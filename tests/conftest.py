# ABOUTME: Shared pytest fixtures for Bookshelf tests.
# ABOUTME: Provides a deterministic clock, a temporary vault, a note writer, and sample books.

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from bookshelf.core.writer import BookNoteWriter
from bookshelf.models.book import Book
from bookshelf.notes.dates import Clock
from bookshelf.settings import BookshelfSettings
from bookshelf.vault.storage import FileSystemStorage

START_INSTANT = datetime(2024, 3, 10, 9, 30, 0, tzinfo=timezone.utc)


class TickingSource:
    """Fake UTC time source that advances one minute per call."""

    def __init__(self, start: datetime = START_INSTANT) -> None:
        self._current = start

    def __call__(self) -> datetime:
        value = self._current
        self._current += timedelta(minutes=1)
        return value


@pytest.fixture
def fixed_clock() -> Clock:
    """Clock that always reports 2024-03-10 09:30:00 UTC."""
    return Clock(source=lambda: START_INSTANT)


@pytest.fixture
def ticking_clock() -> Clock:
    """Clock starting at 2024-03-10 09:30:00 UTC, one minute later on every call."""
    return Clock(source=TickingSource())


@pytest.fixture
def vault_root(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    root.mkdir()
    return root


@pytest.fixture
def storage(vault_root: Path) -> FileSystemStorage:
    return FileSystemStorage(vault_root)


@pytest.fixture
def settings() -> BookshelfSettings:
    return BookshelfSettings()


@pytest.fixture
def writer(
    storage: FileSystemStorage, settings: BookshelfSettings, ticking_clock: Clock
) -> BookNoteWriter:
    return BookNoteWriter(storage, settings, ticking_clock)


@pytest.fixture
def sample_book() -> Book:
    """A 200-page book with full catalog metadata."""
    return Book(
        title="The Name of the Rose",
        author=["Umberto Eco"],
        publisher="Harcourt",
        publish_date="1983",
        total_pages=200,
        isbn10="0156001314",
        isbn13="9780156001311",
        cover_url="https://covers.openlibrary.org/b/id/240727-M.jpg",
        category=["Mystery", "Historical fiction"],
    )


@pytest.fixture
def sample_note(writer: BookNoteWriter, sample_book: Book) -> str:
    """Path of a freshly created note for sample_book."""
    return writer.create_note(sample_book)
