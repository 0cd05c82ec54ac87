# ABOUTME: Creates book notes and applies field edits and reading progress to existing ones.
# ABOUTME: Composes the block converter, front matter codec, and reading history codec over NoteStorage.

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from bookshelf.models.book import Book, ReadingSession
from bookshelf.models.validation import validate_book
from bookshelf.notes.converter import block_to_book, book_to_block
from bookshelf.notes.dates import Clock
from bookshelf.notes.frontmatter import SUMMARY_KEY, MetadataBlock, compose_note, deserialize_note
from bookshelf.notes.history import (
    create_session,
    last_end_page,
    parse_section,
    render_section,
    splice_section,
)
from bookshelf.settings import BookshelfSettings
from bookshelf.vault.paths import books_folder, note_path
from bookshelf.vault.storage import NoteExistsError, NoteStorage

logger = logging.getLogger(__name__)


@dataclass
class BookNote:
    """A decoded book note: the Book, its sessions, and the raw parts they came from."""

    path: str
    book: Book
    sessions: list[ReadingSession] = field(default_factory=list)
    block: MetadataBlock = field(default_factory=dict)
    body: str = ""

    @property
    def summary(self) -> list[dict[str, Any]]:
        entries = self.block.get(SUMMARY_KEY)
        return entries if isinstance(entries, list) else []


def skeleton_body(book: Book) -> str:
    """Initial body for a new note: a title heading and the cover, if known."""
    body = f"# {book.title}\n"
    if book.cover_url:
        body += f"\n![cover|150]({book.cover_url})\n"
    return body


def _merge_blocks(existing: Mapping[str, Any], updated: MetadataBlock) -> MetadataBlock:
    """Overlay the re-encoded book on the old block, keeping keys the book does not own.

    The reading history summary and any keys a user added by hand survive.
    """
    merged = dict(updated)
    for key, value in existing.items():
        if key not in merged:
            merged[key] = value
    return merged


class BookNoteWriter:
    """Reads and writes book notes through a NoteStorage.

    Every operation reads the note fresh, re-encodes the whole header and
    overwrites the file. Last write wins; there is no locking.
    """

    def __init__(
        self,
        storage: NoteStorage,
        settings: BookshelfSettings | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._storage = storage
        self._settings = settings or BookshelfSettings()
        self._clock = clock or self._settings.clock()

    @property
    def books_folder(self) -> str:
        return books_folder(self._settings.book_folder)

    def path_for(self, book: Book) -> str:
        """Vault-relative note path derived from the book's title."""
        return note_path(self._settings.book_folder, book.title)

    def create_note(self, book: Book) -> str:
        """Write a new note for book and return its path.

        Raises:
            NoteExistsError: If a note for this title already exists.
            NoteStorageError: If the storage layer fails.
        """
        now = self._clock.now()
        book = validate_book(
            replace(book, created=book.created or now, updated=book.updated or now)
        )

        self._storage.ensure_folder(self.books_folder)
        path = self.path_for(book)
        if self._storage.exists(path):
            raise NoteExistsError(f"Book note already exists: {path}")

        block = book_to_block(book, self._clock)
        block[SUMMARY_KEY] = []
        content = compose_note(block, skeleton_body(book))
        created_path = self._storage.create_text(path, content)
        logger.info("Created book note %s", created_path)
        return created_path

    def read_note(self, path: str) -> BookNote:
        """Decode a note. Malformed headers or history degrade instead of raising."""
        text = self._storage.read_text(path)
        block, body = deserialize_note(text)
        return BookNote(
            path=path,
            book=block_to_book(block, self._clock),
            sessions=parse_section(body),
            block=block,
            body=body,
        )

    def list_notes(self) -> list[BookNote]:
        """Decode every note in the books folder."""
        return [self.read_note(path) for path in self._storage.list_notes(self.books_folder)]

    def update_fields(self, path: str, **changes: Any) -> Book:
        """Shallow-merge changes into the note's book and rewrite the header.

        Keyword names are Book field names; unknown names raise TypeError.
        created is never changed and updated is refreshed.
        """
        note = self.read_note(path)
        merged = replace(note.book, **changes)
        book = validate_book(
            replace(merged, created=note.book.created, updated=self._clock.now())
        )

        block = _merge_blocks(note.block, book_to_block(book, self._clock))
        self._storage.write_text(path, compose_note(block, note.body))
        logger.info("Updated %s: %s", path, ", ".join(sorted(changes)) or "timestamp only")
        return book

    def record_progress(
        self,
        path: str,
        end_page: int,
        start_page: int | None = None,
        notes: str | None = None,
        auto_status_change: bool | None = None,
    ) -> ReadingSession:
        """Log a reading session ending at end_page and update derived state.

        The start page is, in order of preference: the explicit argument, the
        newest session's end page, the book's current read page, then 0.
        With automatic status changes a book becomes "finished" once end_page
        reaches a known page count, or "reading" when an unread book gets
        progress. Status never moves backwards and timestamps already set
        are kept.

        Raises:
            ValueError: If a page number is negative.
        """
        if end_page < 0 or (start_page is not None and start_page < 0):
            raise ValueError("Page numbers cannot be negative")
        if auto_status_change is None:
            auto_status_change = self._settings.auto_status_change
        track_history = self._settings.track_reading_history

        note = self.read_note(path)
        book = note.book

        if start_page is None:
            previous_end = last_end_page(note.sessions)
            start_page = previous_end if previous_end is not None else (book.read_page or 0)

        session = create_session(start_page, end_page, notes, self._clock)
        now = self._clock.now()

        status = book.status
        read_started = book.read_started
        read_finished = book.read_finished
        if auto_status_change:
            if book.total_pages and end_page >= book.total_pages:
                status = "finished"
                read_finished = read_finished or now
            elif end_page > 0 and status == "unread":
                status = "reading"
                read_started = read_started or now

        book = validate_book(
            replace(
                book,
                status=status,
                read_page=end_page,
                read_started=read_started,
                read_finished=read_finished,
                updated=now,
            )
        )

        block = _merge_blocks(note.block, book_to_block(book, self._clock))
        body = note.body
        if track_history:
            block[SUMMARY_KEY] = [*note.summary, session.to_summary()]
            body = splice_section(body, render_section([session, *note.sessions]))

        self._storage.write_text(path, compose_note(block, body))
        logger.info(
            "Recorded pages %d-%d for %s (status %s)", start_page, end_page, path, book.status
        )
        return session
