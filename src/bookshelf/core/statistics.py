# ABOUTME: Aggregate reading statistics across all book notes in the vault.
# ABOUTME: Counts by status, pages, reading days, and per-year/per-month finished-book trends.

from collections.abc import Iterable
from dataclasses import dataclass, field

from bookshelf.core.writer import BookNote


@dataclass
class PeriodStats:
    """Finished books in one year ("2024") or month ("2024-03")."""

    count: int = 0
    pages: int = 0
    reading_days: int = 0
    average_days_to_finish: int = 0
    change: int | None = None
    change_percent: int | None = None


@dataclass
class BookStatistics:
    total_books: int = 0
    unread: int = 0
    reading: int = 0
    finished: int = 0
    total_pages: int = 0
    read_pages: int = 0
    reading_days: int = 0
    average_days_to_finish: int = 0
    category_counts: dict[str, int] = field(default_factory=dict)
    yearly: dict[str, PeriodStats] = field(default_factory=dict)
    monthly: dict[str, PeriodStats] = field(default_factory=dict)


def _reading_days(note: BookNote) -> set[str]:
    """Distinct days with activity: the start day plus every logged session date."""
    days: set[str] = set()
    if note.book.read_started:
        days.add(note.book.read_started[:10])
    for entry in note.summary:
        day = entry.get("date")
        if isinstance(day, str) and day:
            days.add(day)
    return days


def _finalize_periods(periods: dict[str, PeriodStats]) -> None:
    """Average the per-period reading days and compute change vs. the previous period.

    MUTATES the PeriodStats values in place.
    """
    previous: PeriodStats | None = None
    for key in sorted(periods):
        current = periods[key]
        if current.count:
            current.average_days_to_finish = round(current.reading_days / current.count)
        if previous is not None:
            current.change = current.count - previous.count
            if previous.count:
                current.change_percent = round(current.change / previous.count * 100)
            else:
                current.change_percent = 100 if current.count else 0
        previous = current


def compute_statistics(notes: Iterable[BookNote]) -> BookStatistics:
    """Summarize a collection of decoded book notes."""
    stats = BookStatistics()
    all_days: set[str] = set()
    finish_days: list[int] = []

    for note in notes:
        book = note.book
        stats.total_books += 1
        if book.status == "unread":
            stats.unread += 1
        elif book.status == "reading":
            stats.reading += 1
        elif book.status == "finished":
            stats.finished += 1

        stats.total_pages += book.total_pages or 0
        stats.read_pages += book.read_page or 0

        days = _reading_days(note)
        all_days |= days

        if book.status != "finished":
            continue

        for category in book.category:
            stats.category_counts[category] = stats.category_counts.get(category, 0) + 1
        if days:
            finish_days.append(len(days))

        if not book.read_finished or len(book.read_finished) < 7:
            continue
        year = book.read_finished[:4]
        month = book.read_finished[:7]
        for periods, key in ((stats.yearly, year), (stats.monthly, month)):
            period = periods.setdefault(key, PeriodStats())
            period.count += 1
            period.pages += book.total_pages or 0
            period.reading_days += len(days)

    stats.reading_days = len(all_days)
    if finish_days:
        stats.average_days_to_finish = round(sum(finish_days) / len(finish_days))
    _finalize_periods(stats.yearly)
    _finalize_periods(stats.monthly)
    return stats
