# ABOUTME: Bookshelf - reading progress tracker that keeps each book as a markdown note.
# ABOUTME: Exposes the shared exception base used across the package.


class BookshelfError(Exception):
    """Base class for errors surfaced to callers of Bookshelf operations."""
