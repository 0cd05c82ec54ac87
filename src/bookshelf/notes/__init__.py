# ABOUTME: Markdown note codec: front matter, block conversion, and the reading history section.
# ABOUTME: Exports the encode/decode entry points used by the note writer.

from bookshelf.notes.converter import block_to_book, book_to_block
from bookshelf.notes.dates import Clock, format_date
from bookshelf.notes.frontmatter import (
    compose_note,
    deserialize_note,
    normalize_block,
    serialize_block,
)
from bookshelf.notes.history import (
    create_session,
    last_end_page,
    parse_section,
    render_section,
    splice_section,
)

__all__ = [
    "Clock",
    "block_to_book",
    "book_to_block",
    "compose_note",
    "create_session",
    "deserialize_note",
    "format_date",
    "last_end_page",
    "normalize_block",
    "parse_section",
    "render_section",
    "serialize_block",
    "splice_section",
]
