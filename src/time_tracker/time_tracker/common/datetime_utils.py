from __future__ import annotations

from datetime import date, datetime, time

from ..core.constants import DISPLAY_TIME_FORMAT, ISO_DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def parse_hhmm(value: str) -> time:
    """Parse a 24-hour "HH:MM" shift boundary; missing parts count as 0."""
    parts = (value or "").strip().split(":")
    hours = _to_int(parts[0]) if parts else 0
    minutes = _to_int(parts[1]) if len(parts) > 1 else 0
    return time(hour=hours % 24, minute=minutes % 60)


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_epoch_millis(value: datetime) -> int:
    """Naive datetimes are read as local wall-clock time."""
    return int(value.timestamp() * 1000)


def format_display_time(value: datetime) -> str:
    """12-hour clock text shown next to each event, e.g. "02:30 PM"."""
    return value.strftime(DISPLAY_TIME_FORMAT)


def parse_display_time(value: str, *, on_date: date) -> datetime:
    """Anchor a 12-hour time string such as "2:30 PM" to midnight of ``on_date``.

    Unparseable hour or minute parts fall back to 0 instead of failing.
    "12 AM" maps to hour 0 and PM adds 12 hours unless the hour is already 12.
    """

    text = (value or "").strip()
    time_part, _, period = text.partition(" ")
    period = period.replace(".", "").replace(" ", "").lower()

    pieces = time_part.split(":")
    hours = _to_int(pieces[0]) if pieces else 0
    minutes = _to_int(pieces[1]) if len(pieces) > 1 else 0

    if period == "pm" and hours != 12:
        hours += 12
    if period == "am" and hours == 12:
        hours = 0

    if not 0 <= hours <= 23:
        hours = 0
    if not 0 <= minutes <= 59:
        minutes = 0

    return datetime.combine(on_date, time(hour=hours, minute=minutes))


def sunday_first_weekday(value: date) -> int:
    """Weekday index with Sunday = 0 ... Saturday = 6."""
    return (value.weekday() + 1) % 7


def _to_int(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def format_worked_time(minutes: int) -> str:
    """Render minutes as "7h 05m"."""
    minutes = int(minutes)
    return f"{minutes // 60}h {minutes % 60:02d}m"
