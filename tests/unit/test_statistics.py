# ABOUTME: Unit tests for aggregate reading statistics.
# ABOUTME: Covers status counts, page totals, reading days, categories, and period trends.

import pytest

from bookshelf.core.statistics import BookStatistics, compute_statistics
from bookshelf.core.writer import BookNote
from bookshelf.models.book import Book


def _note(book: Book, *dates: str) -> BookNote:
    summary = [{"date": day, "pagesRead": 1} for day in dates]
    return BookNote(
        path=f"Bookshelf/Books/{book.title}.md",
        book=book,
        block={"reading_history_summary": summary},
    )


@pytest.fixture
def notes() -> list[BookNote]:
    return [
        _note(
            Book(
                title="A",
                status="finished",
                total_pages=200,
                read_page=200,
                category=["Mystery"],
                read_started="2024-01-05 10:00:00",
                read_finished="2024-01-20 10:00:00",
            ),
            "2024-01-05",
            "2024-01-10",
            "2024-01-20",
        ),
        _note(
            Book(
                title="B",
                status="finished",
                total_pages=300,
                read_page=300,
                category=["Mystery", "Sci-fi"],
                read_started="2024-02-01 08:00:00",
                read_finished="2024-02-15 08:00:00",
            ),
            "2024-02-01",
        ),
        _note(
            Book(
                title="C",
                status="finished",
                total_pages=100,
                read_page=100,
                read_started="2023-12-01 08:00:00",
                read_finished="2023-12-30 08:00:00",
            ),
        ),
        _note(
            Book(
                title="D",
                status="reading",
                total_pages=400,
                read_page=50,
                read_started="2024-03-01 08:00:00",
            ),
            "2024-03-02",
        ),
        _note(Book(title="E")),
    ]


class TestComputeStatistics:
    """Tests for compute_statistics."""

    def test_empty_vault(self) -> None:
        assert compute_statistics([]) == BookStatistics()

    def test_status_counts(self, notes: list[BookNote]) -> None:
        stats = compute_statistics(notes)
        assert stats.total_books == 5
        assert (stats.unread, stats.reading, stats.finished) == (1, 1, 3)

    def test_page_totals(self, notes: list[BookNote]) -> None:
        """Unknown page counts contribute nothing."""
        stats = compute_statistics(notes)
        assert stats.total_pages == 1000
        assert stats.read_pages == 650

    def test_reading_days_are_distinct(self, notes: list[BookNote]) -> None:
        """The start day and session days are merged per calendar day."""
        assert compute_statistics(notes).reading_days == 7

    def test_average_days_to_finish(self, notes: list[BookNote]) -> None:
        assert compute_statistics(notes).average_days_to_finish == 2

    def test_categories_count_finished_books_only(self, notes: list[BookNote]) -> None:
        assert compute_statistics(notes).category_counts == {"Mystery": 2, "Sci-fi": 1}

    def test_yearly_trend(self, notes: list[BookNote]) -> None:
        yearly = compute_statistics(notes).yearly
        assert sorted(yearly) == ["2023", "2024"]
        assert (yearly["2023"].count, yearly["2023"].pages, yearly["2023"].change) == (1, 100, None)
        assert yearly["2024"].count == 2
        assert yearly["2024"].pages == 500
        assert yearly["2024"].average_days_to_finish == 2
        assert (yearly["2024"].change, yearly["2024"].change_percent) == (1, 100)

    def test_monthly_trend(self, notes: list[BookNote]) -> None:
        monthly = compute_statistics(notes).monthly
        assert sorted(monthly) == ["2023-12", "2024-01", "2024-02"]
        assert monthly["2024-01"].average_days_to_finish == 3
        assert (monthly["2024-02"].change, monthly["2024-02"].change_percent) == (0, 0)

    def test_finished_without_date_not_in_periods(self) -> None:
        stats = compute_statistics([_note(Book(title="X", status="finished"))])
        assert stats.finished == 1
        assert stats.yearly == {}
