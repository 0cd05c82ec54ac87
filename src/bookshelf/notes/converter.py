# ABOUTME: Converts between the Book dataclass and the flat front matter block.
# ABOUTME: Packs/unpacks ISBNs, coerces unknown statuses, and reconciles read_page with the summary log.

from collections.abc import Mapping
from typing import Any

from bookshelf.models.book import BOOK_STATUSES, UNKNOWN_TITLE, Book
from bookshelf.notes.dates import Clock
from bookshelf.notes.frontmatter import SUMMARY_KEY, MetadataBlock

# Block keys written by book_to_block, in header order.
BOOK_KEYS = (
    "title",
    "subtitle",
    "author",
    "category",
    "publisher",
    "publish",
    "isbn",
    "cover",
    "total",
    "status",
    "read_page",
    "read_started",
    "read_finished",
    "created",
    "updated",
    "cover_edition_key",
)


def pack_isbn(isbn10: str | None, isbn13: str | None) -> str:
    """Join ISBN-10 and ISBN-13 into one space-separated field ("" when both absent)."""
    return f"{isbn10 or ''} {isbn13 or ''}".strip()


def unpack_isbn(value: Any) -> tuple[str | None, str | None]:
    """Split a packed isbn field, classifying tokens by length.

    Tokens that are neither 10 nor 13 characters long are dropped.
    """
    isbn10: str | None = None
    isbn13: str | None = None
    if value is None or value == "":
        return isbn10, isbn13
    for token in str(value).split():
        if len(token) == 10:
            isbn10 = token
        elif len(token) == 13:
            isbn13 = token
    return isbn10, isbn13


def book_to_block(book: Book, clock: Clock | None = None) -> MetadataBlock:
    """Map a Book onto its front matter block.

    read_started falls back to the creation timestamp, and an absent
    read_finished is an explicit None so the serializer decides how to show it.
    """
    clock = clock or Clock()
    now = clock.now()
    created = book.created or now

    return {
        "title": book.title or "",
        "subtitle": book.subtitle or "",
        "author": list(book.author),
        "category": list(book.category),
        "publisher": book.publisher or "",
        "publish": book.publish_date or "",
        "isbn": pack_isbn(book.isbn10, book.isbn13),
        "cover": book.cover_url or "",
        "total": book.total_pages,
        "status": book.status or "unread",
        "read_page": book.read_page or 0,
        "read_started": book.read_started if book.read_started is not None else created,
        "read_finished": book.read_finished or None,
        "created": created,
        "updated": book.updated or now,
        "cover_edition_key": book.cover_edition_key,
    }


def _as_int(value: Any) -> int | None:
    # bool is an int subclass; "total: true" is not a page count.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _as_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _as_str_list(value: Any) -> list[str]:
    # A hand-written "author: Name" is a one-element list.
    if isinstance(value, str):
        return [value] if value else []
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def summary_pages(block: Mapping[str, Any]) -> int:
    """Total pagesRead across the block's reading history summary."""
    entries = block.get(SUMMARY_KEY)
    if not isinstance(entries, list):
        return 0
    total = 0
    for entry in entries:
        if isinstance(entry, Mapping):
            total += _as_int(entry.get("pagesRead")) or 0
    return total


def block_to_book(block: Mapping[str, Any], clock: Clock | None = None) -> Book:
    """Map a front matter block back onto a Book.

    read_page is the larger of the literal field and the summary total, so
    the session log is never undercounted, capped at a known page count.
    Missing timestamps default to now.
    """
    clock = clock or Clock()
    isbn10, isbn13 = unpack_isbn(block.get("isbn"))

    total_pages = _as_int(block.get("total"))
    read_page = max(_as_int(block.get("read_page")) or 0, summary_pages(block))
    # Re-reads push the summary total past the book length.
    if total_pages is not None and total_pages >= 0:
        read_page = min(read_page, total_pages)

    status = block.get("status")
    if status not in BOOK_STATUSES:
        status = "unread"

    return Book(
        title=_as_str(block.get("title")) or UNKNOWN_TITLE,
        subtitle=_as_str(block.get("subtitle")),
        author=_as_str_list(block.get("author")),
        category=_as_str_list(block.get("category")),
        publisher=_as_str(block.get("publisher")),
        publish_date=_as_str(block.get("publish")),
        total_pages=total_pages,
        isbn10=isbn10,
        isbn13=isbn13,
        cover_url=_as_str(block.get("cover")),
        cover_edition_key=_as_str(block.get("cover_edition_key")),
        status=status,
        read_page=read_page,
        read_started=_as_str(block.get("read_started")),
        read_finished=_as_str(block.get("read_finished")),
        created=_as_str(block.get("created")) or clock.now(),
        updated=_as_str(block.get("updated")) or clock.now(),
    )
