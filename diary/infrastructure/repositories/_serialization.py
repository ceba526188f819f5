"""Record field helpers shared by repositories.

Timestamps are stored as ISO 8601 UTC strings and times of day as "HH:MM"
so records read the same from every backend.
"""

from datetime import datetime, time

from diary.shared.utils.datetime import ensure_utc, parse_datetime_utc


def dump_datetime(value: datetime | None) -> str | None:
    utc = ensure_utc(value)
    return utc.isoformat() if utc is not None else None


def load_datetime(value: object) -> datetime | None:
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str):
        return parse_datetime_utc(value)
    return None


def dump_time(value: time) -> str:
    return value.strftime("%H:%M")


def load_time(value: object, default: time) -> time:
    """Parse "HH:MM" (or "HH:MM:SS"); anything else yields default."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        return default
    try:
        return time.fromisoformat(value.strip())
    except ValueError:
        return default
