# ABOUTME: Open Library catalog client.
# ABOUTME: Searches openlibrary.org and fetches work details, returning Books ready for a note.

import logging
import re
from typing import Any

from bookshelf.catalog.candidate import CatalogHit
from bookshelf.catalog.http import CatalogFetchError, HttpClient
from bookshelf.catalog.openlibrary_parser import (
    build_cover_url,
    parse_author_name,
    parse_search_doc,
    parse_work,
    work_author_keys,
)
from bookshelf.models.book import Book

logger = logging.getLogger(__name__)

_OL_BASE = "https://openlibrary.org"
DEFAULT_SEARCH_LIMIT = 20

_WORK_KEY_RE = re.compile(r"^(?:/works/)?(OL\d+W)$")


def normalize_work_key(work_key: str) -> str:
    """Accept "OL123W" or "/works/OL123W" and return the "/works/OL123W" form.

    Raises:
        ValueError: If work_key is not an Open Library work key.
    """
    match = _WORK_KEY_RE.match(work_key.strip())
    if not match:
        raise ValueError(f"Not an Open Library work key: {work_key!r}")
    return f"/works/{match.group(1)}"


class OpenLibraryClient:
    """Book catalog backed by the Open Library API.

    The primary request of each operation raises CatalogFetchError on
    failure. Follow-up enrichment (editions, author names) is best effort:
    failures are logged and the book is returned without that data.
    """

    def __init__(self, http_client: HttpClient, search_limit: int = DEFAULT_SEARCH_LIMIT) -> None:
        self._http = http_client
        self._search_limit = search_limit

    @property
    def name(self) -> str:
        return "openlibrary"

    def search(self, query: str, limit: int | None = None) -> list[CatalogHit]:
        """Search by free-text query, keeping each result's work key.

        Raises:
            CatalogFetchError: If the search request fails.
        """
        params = {"q": query, "limit": str(limit or self._search_limit)}
        data = self._http.get(f"{_OL_BASE}/search.json", params=params)
        return [
            CatalogHit(book=parse_search_doc(doc), work_key=doc.get("key", ""), source=self.name)
            for doc in data.get("docs", []) or []
            if isinstance(doc, dict)
        ]

    def search_books(self, query: str, limit: int | None = None) -> list[Book]:
        """Search by free-text query and return the parsed Books."""
        return [hit.book for hit in self.search(query, limit)]

    def get_book_details(self, work_key: str) -> Book:
        """Fetch a work and its first edition, and resolve author names.

        Raises:
            CatalogFetchError: If the work itself cannot be fetched.
            ValueError: If work_key is not a work key.
        """
        key = normalize_work_key(work_key)
        work = self._http.get(f"{_OL_BASE}{key}.json")
        edition = self._first_edition(key)
        authors = self._author_names(work, edition)
        return parse_work(work, edition, authors)

    def cover_url(self, cover: int | str, size: str = "M") -> str:
        return build_cover_url(cover, size)

    def _first_edition(self, work_key: str) -> dict[str, Any] | None:
        try:
            data = self._http.get(f"{_OL_BASE}{work_key}/editions.json")
        except CatalogFetchError as exc:
            logger.warning("Edition lookup failed for %s: %s", work_key, exc)
            return None
        entries = data.get("entries") or []
        return entries[0] if entries and isinstance(entries[0], dict) else None

    def _author_names(self, work: dict[str, Any], edition: dict[str, Any] | None) -> list[str]:
        """Resolve author keys from the work (or, failing that, the edition) to names."""
        keys = work_author_keys(work) or work_author_keys(edition or {})
        names: list[str] = []
        for key in keys:
            try:
                names.append(parse_author_name(self._http.get(f"{_OL_BASE}{key}.json")))
            except CatalogFetchError as exc:
                logger.warning("Author lookup failed for %s: %s", key, exc)
        return names
