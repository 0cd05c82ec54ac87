# ABOUTME: Timezone-adjusted, fixed-format date/time rendering for note timestamps.
# ABOUTME: Clock carries the project-wide UTC offset so every timestamp agrees on one timezone.

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone

DEFAULT_PATTERN = "YYYY-MM-DD HH:mm:ss"
DATE_PATTERN = "YYYY-MM-DD"
INVALID_DATE = "Invalid Date"

# Longest tokens first so "MM" never eats part of "mm".
_TOKENS = (
    ("YYYY", "%04d", "year"),
    ("MM", "%02d", "month"),
    ("DD", "%02d", "day"),
    ("HH", "%02d", "hour"),
    ("mm", "%02d", "minute"),
    ("ss", "%02d", "second"),
)


def _to_utc(value: datetime | date | str) -> datetime | None:
    """Normalize a datetime, date, or ISO string to an aware UTC datetime.

    Naive datetimes are taken to already be in UTC. Returns None when a
    string cannot be parsed.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    elif not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_date(
    value: datetime | date | str,
    pattern: str = DEFAULT_PATTERN,
    offset_hours: float = 0,
) -> str:
    """Render value in pattern after shifting it offset_hours from UTC.

    The same instant renders identically regardless of the machine's local
    timezone. Unparseable strings render as "Invalid Date" instead of raising.
    """
    instant = _to_utc(value)
    if instant is None:
        return INVALID_DATE

    shifted = instant + timedelta(hours=offset_hours)
    result = pattern
    for token, fmt, attr in _TOKENS:
        result = result.replace(token, fmt % getattr(shifted, attr))
    return result


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Clock:
    """Source of formatted "now" timestamps for one configured timezone.

    The offset is configuration, not hidden module state: whoever builds the
    note writer decides the timezone and passes the same Clock everywhere.
    Tests inject a fixed source.
    """

    offset_hours: float = 0
    source: Callable[[], datetime] = field(default=_utc_now, compare=False)

    def format(self, value: datetime | date | str, pattern: str = DEFAULT_PATTERN) -> str:
        return format_date(value, pattern, self.offset_hours)

    def now(self) -> str:
        """Current instant as "YYYY-MM-DD HH:mm:ss"."""
        return self.format(self.source())

    def today(self) -> str:
        """Current date as "YYYY-MM-DD"."""
        return self.format(self.source(), DATE_PATTERN)
