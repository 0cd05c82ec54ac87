# ABOUTME: Data model package for books and reading sessions.
# ABOUTME: Exports the Book and ReadingSession dataclasses and validation helpers.

from bookshelf.models.book import BOOK_STATUSES, Book, BookStatus, ReadingSession
from bookshelf.models.validation import validate_book

__all__ = [
    "BOOK_STATUSES",
    "Book",
    "BookStatus",
    "ReadingSession",
    "validate_book",
]
