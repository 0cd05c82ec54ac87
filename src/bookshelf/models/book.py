# ABOUTME: Core data structures for tracked books and their reading sessions.
# ABOUTME: Book is the interchange format between the catalog, the note codec, and the writer.

from dataclasses import dataclass, field
from typing import Literal

BookStatus = Literal["unread", "reading", "finished"]

BOOK_STATUSES: tuple[str, ...] = ("unread", "reading", "finished")

UNKNOWN_TITLE = "Unknown Title"


@dataclass
class Book:
    """A tracked book as stored in its note's front matter.

    Everything is optional except title, which falls back to a placeholder
    so a note can always be named. Timestamps are "YYYY-MM-DD HH:mm:ss"
    strings rendered by a Clock; empty created/updated are filled in when
    the book is first written.
    """

    title: str = UNKNOWN_TITLE
    subtitle: str | None = None
    author: list[str] = field(default_factory=list)
    publisher: str | None = None
    publish_date: str | None = None
    total_pages: int | None = None
    isbn10: str | None = None
    isbn13: str | None = None
    cover_url: str | None = None
    category: list[str] = field(default_factory=list)
    cover_edition_key: str | None = None
    status: BookStatus = "unread"
    read_page: int = 0
    read_started: str | None = None
    read_finished: str | None = None
    created: str = ""
    updated: str = ""

    @property
    def authors_display(self) -> str:
        """Convenience property: joined author string for display."""
        return ", ".join(self.author) if self.author else ""

    @property
    def progress(self) -> float | None:
        """Fraction of the book read, or None when the page count is unknown."""
        if not self.total_pages:
            return None
        return min(1.0, self.read_page / self.total_pages)


@dataclass
class ReadingSession:
    """One logged interval of reading, embedded in the note body."""

    date: str
    start_page: int = 0
    end_page: int = 0
    pages_read: int = 0
    notes: str | None = None
    timestamp: str | None = None

    @property
    def sort_key(self) -> str:
        """Timestamp when present, else the date. Both sort lexicographically."""
        return self.timestamp or self.date or ""

    def to_summary(self) -> dict[str, int | str]:
        """Compact front matter mirror of this session (notes excluded)."""
        return {
            "date": self.date,
            "startPage": self.start_page,
            "endPage": self.end_page,
            "pagesRead": self.pages_read,
            "timestamp": self.timestamp or self.date,
        }
