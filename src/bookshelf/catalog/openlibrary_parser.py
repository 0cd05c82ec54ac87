# ABOUTME: Parsing functions for Open Library API JSON responses.
# ABOUTME: Converts search docs, works, and editions into Book instances ready for a note.

from typing import Any

from bookshelf.models.book import UNKNOWN_TITLE, Book

_COVERS_BASE_URL = "https://covers.openlibrary.org/b"
CATEGORY_LIMIT = 5


def build_cover_url(cover: int | str, size: str = "M") -> str:
    """Build an Open Library cover image URL.

    Args:
        cover: A numeric cover ID, or an ISBN string.
        size: Image size: "S" (small), "M" (medium), or "L" (large).
    """
    if isinstance(cover, int):
        return f"{_COVERS_BASE_URL}/id/{cover}-{size}.jpg"
    return f"{_COVERS_BASE_URL}/isbn/{cover}-{size}.jpg"


def _first(values: Any) -> Any:
    if isinstance(values, list) and values:
        return values[0]
    return None


def _pick_isbn(isbns: Any, length: int) -> str | None:
    if not isinstance(isbns, list):
        return None
    for isbn in isbns:
        if isinstance(isbn, str) and len(isbn) == length:
            return isbn
    return None


def _cover_for(cover_id: Any, isbn13: str | None, isbn10: str | None) -> str | None:
    """Prefer the numeric cover ID, then fall back to an ISBN cover."""
    if isinstance(cover_id, int) and cover_id > 0:
        return build_cover_url(cover_id)
    if isbn13:
        return build_cover_url(isbn13)
    if isbn10:
        return build_cover_url(isbn10)
    return None


def _categories(subjects: Any) -> list[str]:
    if not isinstance(subjects, list):
        return []
    return [str(subject) for subject in subjects[:CATEGORY_LIMIT]]


def _page_count(value: Any) -> int | None:
    return value if isinstance(value, int) and value >= 0 else None


def parse_author_name(data: dict[str, Any]) -> str:
    """Extract the author name from an Open Library Author response."""
    return data.get("name", "Unknown")


def work_author_keys(work: dict[str, Any]) -> list[str]:
    """Author keys of a Work, stored as [{"author": {"key": "/authors/..."}}]."""
    keys: list[str] = []
    for entry in work.get("authors", []) or []:
        if not isinstance(entry, dict):
            continue
        key = (entry.get("author") or {}).get("key") or entry.get("key")
        if key:
            keys.append(key)
    return keys


def parse_search_doc(doc: dict[str, Any]) -> Book:
    """Convert one Search API doc into a Book.

    The publish date prefers the first publish year over the first listed
    publish date. Only the first five subjects become categories.
    """
    isbns = doc.get("isbn")
    isbn10 = _pick_isbn(isbns, 10)
    isbn13 = _pick_isbn(isbns, 13)

    publish_year = doc.get("first_publish_year") or _first(doc.get("publish_year"))
    publish_date = str(publish_year) if publish_year else _first(doc.get("publish_date"))

    return Book(
        title=doc.get("title") or UNKNOWN_TITLE,
        subtitle=doc.get("subtitle"),
        author=list(doc.get("author_name", []) or []),
        isbn10=isbn10,
        isbn13=isbn13,
        publisher=_first(doc.get("publisher")),
        publish_date=publish_date,
        total_pages=_page_count(doc.get("number_of_pages_median")),
        cover_url=_cover_for(doc.get("cover_i"), isbn13, isbn10),
        category=_categories(doc.get("subject")),
        cover_edition_key=doc.get("cover_edition_key"),
    )


def parse_work(
    work: dict[str, Any],
    edition: dict[str, Any] | None = None,
    authors: list[str] | None = None,
) -> Book:
    """Convert a Work (plus its first edition, if fetched) into a Book.

    Edition-level fields (ISBNs, publisher, page count) win over the work's.
    Author names must be resolved by the caller since works only carry keys.
    """
    edition = edition or {}
    isbn10 = _first(edition.get("isbn_10")) or _first(work.get("isbn_10"))
    isbn13 = _first(edition.get("isbn_13")) or _first(work.get("isbn_13"))

    return Book(
        title=work.get("title") or edition.get("title") or UNKNOWN_TITLE,
        subtitle=work.get("subtitle") or edition.get("subtitle"),
        author=list(authors or []),
        isbn10=isbn10,
        isbn13=isbn13,
        publisher=_first(edition.get("publishers")) or _first(work.get("publishers")),
        publish_date=edition.get("publish_date") or work.get("publish_date"),
        total_pages=_page_count(edition.get("number_of_pages"))
        or _page_count(work.get("number_of_pages")),
        cover_url=_cover_for(_first(work.get("covers")), isbn13, isbn10),
        category=_categories(work.get("subjects")),
        cover_edition_key=(edition.get("key") or "").rsplit("/", 1)[-1] or None,
    )
