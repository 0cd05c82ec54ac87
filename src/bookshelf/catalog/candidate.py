# ABOUTME: CatalogHit pairs a Book parsed from a search result with its catalog work key.
# ABOUTME: The work key is what `get_book_details` needs; it is not stored in the note.

from dataclasses import dataclass

from bookshelf.models.book import Book


@dataclass
class CatalogHit:
    """One search result: the parsed Book plus where it came from."""

    book: Book
    work_key: str
    source: str = "openlibrary"
