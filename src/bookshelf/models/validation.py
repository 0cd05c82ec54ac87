# ABOUTME: Repairs out-of-range book fields instead of rejecting them.
# ABOUTME: Enforces 0 <= read_page <= total_pages, a known status, and a non-blank title.

import logging
from dataclasses import replace

from bookshelf.models.book import BOOK_STATUSES, UNKNOWN_TITLE, Book

logger = logging.getLogger(__name__)


def validate_book(book: Book) -> Book:
    """Return a copy of book with invalid fields clamped or reset.

    Negative page counts are treated as unknown, read_page is clamped into
    [0, total_pages], unknown statuses become "unread", and a blank title
    becomes the placeholder title. Never raises.
    """
    total_pages = book.total_pages
    if total_pages is not None and total_pages < 0:
        logger.warning(
            "Negative total pages %d for %r, treating as unknown", total_pages, book.title
        )
        total_pages = None

    read_page = max(0, book.read_page or 0)
    if total_pages is not None and read_page > total_pages:
        read_page = total_pages

    status = book.status if book.status in BOOK_STATUSES else "unread"

    title = book.title if book.title and book.title.strip() else UNKNOWN_TITLE

    return replace(
        book,
        title=title,
        total_pages=total_pages,
        read_page=read_page,
        status=status,
    )
