# ABOUTME: User settings for Bookshelf, persisted as JSON next to the vault configuration.
# ABOUTME: Missing or unreadable files fall back to defaults so commands always have a config.

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from bookshelf.notes.dates import Clock

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".bookshelf" / "settings.json"


@dataclass
class BookshelfSettings:
    """Configuration shared by the note writer, the catalog client, and the CLI."""

    book_folder: str = "Bookshelf"
    api_timeout: float = 5.0
    search_result_limit: int = 20
    auto_status_change: bool = True
    track_reading_history: bool = True
    require_reading_notes: bool = False
    default_status: str = "unread"
    timezone: float = 0

    def clock(self) -> Clock:
        """Clock rendering timestamps in the configured timezone offset."""
        return Clock(offset_hours=self.timezone)


def load_settings(path: Path | None = None) -> BookshelfSettings:
    """Read settings from a JSON file.

    A missing file gives the defaults. Unknown keys are ignored and a file
    that is not a JSON object is reported and replaced by the defaults.
    """
    settings_path = path or DEFAULT_SETTINGS_PATH
    if not settings_path.exists():
        return BookshelfSettings()

    try:
        raw: Any = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read settings from %s, using defaults: %s", settings_path, exc)
        return BookshelfSettings()

    if not isinstance(raw, dict):
        logger.warning("Settings file %s is not a JSON object, using defaults", settings_path)
        return BookshelfSettings()

    known = {f.name for f in fields(BookshelfSettings)}
    return BookshelfSettings(**{key: value for key, value in raw.items() if key in known})


def save_settings(settings: BookshelfSettings, path: Path | None = None) -> Path:
    """Write settings as pretty-printed JSON, creating parent folders."""
    settings_path = path or DEFAULT_SETTINGS_PATH
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(json.dumps(asdict(settings), indent=2) + "\n", encoding="utf-8")
    return settings_path
