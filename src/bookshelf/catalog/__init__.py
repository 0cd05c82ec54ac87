# ABOUTME: Book catalog package: looks up book metadata from Open Library.
# ABOUTME: Exports the catalog client and the HTTP layer it is built on.

from bookshelf.catalog.candidate import CatalogHit
from bookshelf.catalog.http import CatalogFetchError, CatalogHttpClient, HttpClient
from bookshelf.catalog.openlibrary import OpenLibraryClient

__all__ = [
    "CatalogHit",
    "CatalogFetchError",
    "CatalogHttpClient",
    "HttpClient",
    "OpenLibraryClient",
]
