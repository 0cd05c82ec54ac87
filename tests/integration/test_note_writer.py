# ABOUTME: Integration tests for BookNoteWriter over a real vault folder.
# ABOUTME: Exercises note creation, field edits, and reading progress end to end through the file system.

import pytest

from bookshelf.core.statistics import compute_statistics
from bookshelf.core.writer import BookNoteWriter
from bookshelf.models.book import Book
from bookshelf.notes.dates import Clock
from bookshelf.settings import BookshelfSettings
from bookshelf.vault.storage import FileSystemStorage, NoteExistsError

NOTE_PATH = "Bookshelf/Books/The Name of the Rose.md"


class TestCreateNote:
    """Tests for creating book notes."""

    def test_note_path_from_title(self, writer: BookNoteWriter, sample_book: Book) -> None:
        assert writer.create_note(sample_book) == NOTE_PATH

    def test_note_content(
        self, sample_note: str, storage: FileSystemStorage
    ) -> None:
        """The header lists the book fields; the body has the title and cover."""
        text = storage.read_text(sample_note)
        assert text.startswith("---\ntitle: The Name of the Rose\n")
        assert "author:\n- Umberto Eco\n" in text
        assert "isbn: 0156001314 9780156001311\n" in text
        assert "total: 200\n" in text
        assert "status: unread\n" in text
        assert 'created: "2024-03-10 09:30:00"\n' in text
        assert "reading_history_summary: []\n" in text
        assert "read_finished" not in text
        assert text.endswith(
            "---\n# The Name of the Rose\n\n"
            "![cover|150](https://covers.openlibrary.org/b/id/240727-M.jpg)\n"
        )

    def test_read_back(self, writer: BookNoteWriter, sample_note: str) -> None:
        note = writer.read_note(sample_note)
        assert note.book.title == "The Name of the Rose"
        assert note.book.author == ["Umberto Eco"]
        assert note.book.total_pages == 200
        assert note.book.status == "unread"
        assert note.book.created == "2024-03-10 09:30:00"
        assert note.book.read_started == "2024-03-10 09:30:00"
        assert note.sessions == []
        assert note.summary == []

    def test_duplicate_title_rejected(
        self, writer: BookNoteWriter, sample_book: Book, sample_note: str
    ) -> None:
        with pytest.raises(NoteExistsError):
            writer.create_note(sample_book)

    def test_out_of_range_read_page_clamped(self, writer: BookNoteWriter) -> None:
        path = writer.create_note(Book(title="Dune", total_pages=412, read_page=900))
        assert writer.read_note(path).book.read_page == 412

    def test_custom_book_folder(self, storage: FileSystemStorage, fixed_clock: Clock) -> None:
        writer = BookNoteWriter(storage, BookshelfSettings(book_folder="Reading"), fixed_clock)
        assert writer.create_note(Book(title="Dune")) == "Reading/Books/Dune.md"

    def test_list_notes(self, writer: BookNoteWriter, sample_note: str) -> None:
        writer.create_note(Book(title="Dune"))
        titles = [note.book.title for note in writer.list_notes()]
        assert titles == ["Dune", "The Name of the Rose"]


class TestRecordProgress:
    """Tests for logging reading sessions."""

    def test_first_session_starts_reading(
        self, writer: BookNoteWriter, sample_note: str
    ) -> None:
        """An unread book with progress becomes reading and logs one session."""
        session = writer.record_progress(sample_note, 50, start_page=0)

        note = writer.read_note(sample_note)
        assert session.pages_read == 50
        assert note.book.status == "reading"
        assert note.book.read_page == 50
        assert note.book.read_started
        assert note.book.read_finished is None
        assert len(note.sessions) == 1
        assert note.sessions[0].pages_read == 50
        assert note.summary == [session.to_summary()]

    def test_body_gets_reading_history(
        self, writer: BookNoteWriter, sample_note: str, storage: FileSystemStorage
    ) -> None:
        writer.record_progress(sample_note, 50, start_page=0, notes="Adso arrives.")
        text = storage.read_text(sample_note)
        assert "## Reading History\n\n### 2024-03-10\n\n- **Start Page:** 0\n" in text
        assert "- **Pages Read:** 50\n" in text
        assert "- **Notes:**\n\n  Adso arrives.\n" in text
        assert "# The Name of the Rose\n" in text

    def test_reaching_last_page_finishes_once(
        self, writer: BookNoteWriter, sample_note: str
    ) -> None:
        """read_finished is stamped once and never overwritten."""
        writer.record_progress(sample_note, 200, start_page=0)
        first = writer.read_note(sample_note).book
        assert first.status == "finished"
        assert first.read_finished

        writer.record_progress(sample_note, 200, start_page=0)
        second = writer.read_note(sample_note).book
        assert second.status == "finished"
        assert second.read_finished == first.read_finished
        assert len(writer.read_note(sample_note).sessions) == 2

    def test_start_defaults_to_previous_end(
        self, writer: BookNoteWriter, sample_note: str
    ) -> None:
        writer.record_progress(sample_note, 50)
        session = writer.record_progress(sample_note, 80)
        assert (session.start_page, session.pages_read) == (50, 30)

    def test_start_falls_back_to_read_page(
        self, writer: BookNoteWriter, sample_note: str
    ) -> None:
        writer.update_fields(sample_note, read_page=120)
        assert writer.record_progress(sample_note, 150).start_page == 120

    def test_status_never_moves_backwards(
        self, writer: BookNoteWriter, sample_note: str
    ) -> None:
        writer.record_progress(sample_note, 200)
        writer.record_progress(sample_note, 10, start_page=0)
        assert writer.read_note(sample_note).book.status == "finished"

    def test_auto_status_disabled(self, writer: BookNoteWriter, sample_note: str) -> None:
        writer.record_progress(sample_note, 200, auto_status_change=False)
        book = writer.read_note(sample_note).book
        assert book.status == "unread"
        assert book.read_finished is None

    def test_unknown_total_never_finishes(self, writer: BookNoteWriter) -> None:
        path = writer.create_note(Book(title="Dune"))
        writer.record_progress(path, 500)
        book = writer.read_note(path).book
        assert book.status == "reading"
        assert book.read_page == 500

    def test_read_page_clamped_to_total(
        self, writer: BookNoteWriter, sample_note: str
    ) -> None:
        session = writer.record_progress(sample_note, 250, start_page=190)
        assert session.pages_read == 60
        assert writer.read_note(sample_note).book.read_page == 200

    def test_reread_keeps_read_page_within_total(
        self, writer: BookNoteWriter, sample_note: str
    ) -> None:
        """A second full pass logs more pages than the book has without overrunning it."""
        writer.record_progress(sample_note, 200, start_page=0)
        writer.record_progress(sample_note, 200, start_page=0)

        note = writer.read_note(sample_note)
        assert [s.pages_read for s in note.sessions] == [200, 200]
        assert note.book.read_page == 200
        assert compute_statistics([note]).read_pages == 200

    def test_negative_page_rejected(self, writer: BookNoteWriter, sample_note: str) -> None:
        with pytest.raises(ValueError):
            writer.record_progress(sample_note, -1)

    def test_sessions_rendered_newest_first(
        self, writer: BookNoteWriter, sample_note: str
    ) -> None:
        writer.record_progress(sample_note, 30)
        writer.record_progress(sample_note, 60)
        writer.record_progress(sample_note, 90)
        assert [s.end_page for s in writer.read_note(sample_note).sessions] == [90, 60, 30]

    def test_history_inserted_before_user_sections(
        self, writer: BookNoteWriter, sample_note: str, storage: FileSystemStorage
    ) -> None:
        text = storage.read_text(sample_note)
        storage.write_text(sample_note, text + "\n## Thoughts\n\nLabyrinthine.\n")

        writer.record_progress(sample_note, 40)
        writer.record_progress(sample_note, 80)

        body = writer.read_note(sample_note).body
        assert body.index("## Reading History") < body.index("## Thoughts")
        assert body.endswith("## Thoughts\n\nLabyrinthine.\n")
        assert body.count("## Reading History") == 1

    def test_history_tracking_disabled(
        self, storage: FileSystemStorage, sample_book: Book, ticking_clock: Clock
    ) -> None:
        writer = BookNoteWriter(
            storage, BookshelfSettings(track_reading_history=False), ticking_clock
        )
        path = writer.create_note(sample_book)
        writer.record_progress(path, 40)

        note = writer.read_note(path)
        assert note.book.read_page == 40
        assert note.book.status == "reading"
        assert note.sessions == []
        assert note.summary == []
        assert "Reading History" not in note.body

    def test_hand_written_note_gets_read_started(
        self, writer: BookNoteWriter, storage: FileSystemStorage
    ) -> None:
        """A note without read_started gets it stamped on first progress."""
        storage.ensure_folder("Bookshelf/Books")
        path = "Bookshelf/Books/Dune.md"
        storage.write_text(path, "---\ntitle: Dune\nstatus: unread\ntotal: 412\n---\n# Dune\n")

        writer.record_progress(path, 30)

        book = writer.read_note(path).book
        assert book.status == "reading"
        assert book.read_started is not None
        assert book.read_started.startswith("2024-03-10 ")

    def test_note_without_header_recovers(
        self, writer: BookNoteWriter, storage: FileSystemStorage
    ) -> None:
        """A headerless note is treated as all body and gains a header."""
        storage.ensure_folder("Bookshelf/Books")
        path = "Bookshelf/Books/Loose.md"
        storage.write_text(path, "# Loose notes\n\nSome text.\n")

        writer.record_progress(path, 12)

        note = writer.read_note(path)
        assert note.book.read_page == 12
        assert note.body.startswith("# Loose notes\n\nSome text.\n")
        assert len(note.sessions) == 1

    def test_notes_only_entry_survives_progress(
        self, writer: BookNoteWriter, sample_note: str, storage: FileSystemStorage
    ) -> None:
        """A hand-written entry with no page fields is carried into the re-rendered history."""
        text = storage.read_text(sample_note)
        storage.write_text(
            sample_note,
            text
            + "\n## Reading History\n\n### 2024-02-01\n\n- **Notes:**\n\n"
            "  Loved the library chapter.\n",
        )

        writer.record_progress(sample_note, 50, start_page=0)

        text = storage.read_text(sample_note)
        assert "Loved the library chapter." in text
        assert [s.date for s in writer.read_note(sample_note).sessions] == [
            "2024-03-10",
            "2024-02-01",
        ]

    def test_same_second_sessions_chain_pages(
        self, storage: FileSystemStorage, settings: BookshelfSettings, fixed_clock: Clock
    ) -> None:
        """Sessions logged within one clock tick still continue from the latest end page."""
        writer = BookNoteWriter(storage, settings, fixed_clock)
        path = writer.create_note(Book(title="Dune", total_pages=412))

        writer.record_progress(path, 30)
        writer.record_progress(path, 60)
        third = writer.record_progress(path, 90)

        assert third.start_page == 60
        assert [s.end_page for s in writer.read_note(path).sessions] == [90, 60, 30]


class TestUpdateFields:
    """Tests for editing metadata fields."""

    def test_changes_applied(self, writer: BookNoteWriter, sample_note: str) -> None:
        book = writer.update_fields(sample_note, status="reading", total_pages=536)
        assert book.status == "reading"
        assert writer.read_note(sample_note).book.total_pages == 536

    def test_created_kept_updated_refreshed(
        self, writer: BookNoteWriter, sample_note: str
    ) -> None:
        before = writer.read_note(sample_note).book
        writer.update_fields(sample_note, publisher="Vintage")
        after = writer.read_note(sample_note).book
        assert after.created == before.created
        assert after.updated > before.updated

    def test_summary_and_body_preserved(
        self, writer: BookNoteWriter, sample_note: str
    ) -> None:
        writer.record_progress(sample_note, 50, notes="Good start.")
        before = writer.read_note(sample_note)

        writer.update_fields(sample_note, subtitle="A Novel")

        after = writer.read_note(sample_note)
        assert after.summary == before.summary
        assert after.body == before.body
        assert after.book.subtitle == "A Novel"

    def test_user_keys_preserved(
        self, writer: BookNoteWriter, sample_note: str, storage: FileSystemStorage
    ) -> None:
        text = storage.read_text(sample_note)
        storage.write_text(sample_note, text.replace("---\ntitle:", "---\nrating: 5\ntitle:", 1))

        writer.update_fields(sample_note, status="finished")

        assert writer.read_note(sample_note).block["rating"] == 5

    def test_read_page_clamped(self, writer: BookNoteWriter, sample_note: str) -> None:
        assert writer.update_fields(sample_note, read_page=999).read_page == 200

    def test_unknown_field_rejected(self, writer: BookNoteWriter, sample_note: str) -> None:
        with pytest.raises(TypeError):
            writer.update_fields(sample_note, rating=5)
