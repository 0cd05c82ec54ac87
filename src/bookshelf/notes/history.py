# ABOUTME: Parses and renders the "## Reading History" section of a book note body.
# ABOUTME: Tolerates hand edits on parse, renders one canonical layout, and splices it in place.

import logging
import re
import textwrap
from collections.abc import Iterable

from bookshelf.models.book import ReadingSession
from bookshelf.notes.dates import Clock

logger = logging.getLogger(__name__)

SECTION_TITLE = "Reading History"
SECTION_HEADING = f"## {SECTION_TITLE}"

# Section runs from its level-2 heading to the next level-1/2 heading or end of text.
_SECTION_RE = re.compile(
    rf"^##[ \t]+{re.escape(SECTION_TITLE)}[ \t]*(?:\n.*?)?(?=^#{{1,2}}[ \t]|\Z)",
    re.MULTILINE | re.DOTALL,
)
_FIRST_H2_RE = re.compile(r"^##[ \t]", re.MULTILINE)

# An entry starts at a "### ... YYYY-MM-DD" heading or a "- **Date:** YYYY-MM-DD" bullet.
_ENTRY_START_RE = re.compile(
    r"^(?:###[ \t]+[^\n]*?(?P<heading_date>\d{4}-\d{2}-\d{2})[^\n]*"
    r"|[-*+][ \t]+\*\*Date:?\*\*:?[ \t]*(?P<bullet_date>\d{4}-\d{2}-\d{2})[^\n]*)$",
    re.MULTILINE,
)


def _label(*names: str) -> str:
    """Line-anchored label: optional bullet, optional bold, the name, a colon."""
    alternatives = "|".join(names)
    return rf"^[ \t]*(?:[-*+][ \t]+)?(?:\*\*)?(?:{alternatives})(?:\*\*)?[ \t]*:(?:\*\*)?[ \t]*"


_START_RE = re.compile(
    _label("Start Page", "Start", "From") + r"(\d+)", re.IGNORECASE | re.MULTILINE
)
_END_RE = re.compile(
    _label("End Page", "End", "To", "Page") + r"(\d+)", re.IGNORECASE | re.MULTILINE
)
_PAGES_READ_RE = re.compile(
    _label("Pages Read", "Pages", "Read") + r"(\d+)", re.IGNORECASE | re.MULTILINE
)
_TIMESTAMP_RE = re.compile(
    _label("Timestamp", "Time") + r"(\S[^\n]*?)[ \t]*$", re.IGNORECASE | re.MULTILINE
)
_TIME_LABEL_RE = re.compile(_label("Timestamp", "Time"), re.IGNORECASE | re.MULTILINE)
_NOTES_RE = re.compile(_label("Notes", "Note"), re.IGNORECASE | re.MULTILINE)


def _find_section(body: str) -> re.Match[str] | None:
    return _SECTION_RE.search(body)


def _int_field(pattern: re.Pattern[str], text: str) -> int | None:
    match = pattern.search(text)
    return int(match.group(1)) if match else None


def _parse_notes(text: str) -> str | None:
    """Notes run from the Notes label to the next Time/Timestamp label or entry end."""
    match = _NOTES_RE.search(text)
    if match is None:
        return None

    rest = text[match.end():]
    stop = _TIME_LABEL_RE.search(rest)
    if stop is not None:
        rest = rest[: stop.start()]

    inline, _, following = rest.partition("\n")
    following = textwrap.dedent(following).strip("\n")
    inline = inline.strip()
    notes = f"{inline}\n{following}" if inline and following else inline or following
    notes = notes.strip()
    return notes or None


def _parse_entry(date: str, text: str) -> ReadingSession:
    """Parse one entry; missing page fields read as 0."""
    start_page, end_page, pages_read = (
        _int_field(pattern, text) or 0 for pattern in (_START_RE, _END_RE, _PAGES_READ_RE)
    )

    timestamp_match = _TIMESTAMP_RE.search(text)
    timestamp = timestamp_match.group(1).strip() if timestamp_match else None

    # An explicit non-zero count is trusted even when it disagrees with the pages.
    if pages_read == 0 and end_page > start_page:
        pages_read = end_page - start_page

    return ReadingSession(
        date=date,
        start_page=start_page,
        end_page=end_page,
        pages_read=pages_read,
        notes=_parse_notes(text),
        timestamp=timestamp or None,
    )


def parse_section(body: str) -> list[ReadingSession]:
    """Recover reading sessions from the body's Reading History section.

    Returns sessions in document order. Every field is optional, so an
    entry holding only a date and notes is kept with zeroed pages; a missing
    section yields an empty list. Never raises on malformed text.
    """
    section = _find_section(body)
    if section is None:
        return []

    content = section.group(0)
    starts = list(_ENTRY_START_RE.finditer(content))
    sessions: list[ReadingSession] = []
    for index, start in enumerate(starts):
        end = starts[index + 1].start() if index + 1 < len(starts) else len(content)
        date = start.group("heading_date") or start.group("bullet_date") or ""
        sessions.append(_parse_entry(date, content[start.end():end]))
    logger.debug("Parsed %d reading history entries", len(sessions))
    return sessions


def sort_sessions(history: Iterable[ReadingSession]) -> list[ReadingSession]:
    """Newest first by timestamp (or date), compared as strings.

    Ties keep input order, so callers pass lists newest first (document
    order of a rendered section, with a fresh session prepended).
    """
    return sorted(history, key=lambda session: session.sort_key, reverse=True)


def render_section(history: Iterable[ReadingSession]) -> str:
    """Render the canonical Reading History section, newest session first."""
    lines = [SECTION_HEADING]
    for session in sort_sessions(history):
        lines.append("")
        lines.append(f"### {session.date or 'Unknown Date'}")
        lines.append("")
        lines.append(f"- **Start Page:** {session.start_page or 0}")
        lines.append(f"- **End Page:** {session.end_page or 0}")
        lines.append(f"- **Pages Read:** {session.pages_read or 0}")
        if session.timestamp:
            lines.append(f"- **Timestamp:** {session.timestamp}")
        if session.notes:
            lines.append("- **Notes:**")
            lines.append("")
            lines.extend(f"  {line}" if line else "" for line in session.notes.split("\n"))
    return "\n".join(lines) + "\n"


def splice_section(body: str, section: str) -> str:
    """Put a rendered section into body without touching unrelated text.

    An existing Reading History section is replaced in place. Otherwise the
    section goes right before the first level-2 heading, or at the end.
    """
    section = section.rstrip("\n")
    existing = _find_section(body)
    if existing is not None:
        before = body[: existing.start()]
        after = body[existing.end():]
        separator = "\n\n" if after else "\n"
        return f"{before}{section}{separator}{after}"

    first_heading = _FIRST_H2_RE.search(body)
    if first_heading is not None:
        position = first_heading.start()
        return f"{body[:position]}{section}\n\n{body[position:]}"

    stripped = body.rstrip()
    if not stripped:
        return f"{section}\n"
    return f"{stripped}\n\n{section}\n"


def create_session(
    start_page: int,
    end_page: int,
    notes: str | None = None,
    clock: Clock | None = None,
) -> ReadingSession:
    """Build a new session stamped with the clock's current time."""
    clock = clock or Clock()
    timestamp = clock.now()
    return ReadingSession(
        date=timestamp.split(" ")[0],
        start_page=start_page,
        end_page=end_page,
        pages_read=max(0, end_page - start_page),
        notes=notes or None,
        timestamp=timestamp,
    )


def last_end_page(history: Iterable[ReadingSession]) -> int | None:
    """End page of the newest session, or None when there are no sessions."""
    ordered = sort_sessions(history)
    return ordered[0].end_page if ordered else None
