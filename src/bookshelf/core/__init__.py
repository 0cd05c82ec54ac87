# ABOUTME: Note-level workflows: creating notes, recording progress, and aggregate statistics.
# ABOUTME: Exports the BookNoteWriter orchestrator and the statistics entry point.

from bookshelf.core.statistics import BookStatistics, PeriodStats, compute_statistics
from bookshelf.core.writer import BookNote, BookNoteWriter

__all__ = [
    "BookNote",
    "BookNoteWriter",
    "BookStatistics",
    "PeriodStats",
    "compute_statistics",
]
