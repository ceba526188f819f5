"""User timezone resolution and local-time arithmetic.

Timezone identifiers are IANA names (e.g. "America/New_York"). Conversions
go through zoneinfo so DST offsets are applied for the specific date.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, time, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


class UnknownTimeZoneError(ValueError):
    """Raised when a timezone identifier cannot be resolved."""


def get_time_zone(name: str | None) -> tzinfo:
    """Return tzinfo for an IANA name; empty or "UTC" means UTC.

    Raises:
        UnknownTimeZoneError: If the identifier is not a known zone.
    """
    if not name or name.strip().upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        # tzdata directory names ("America", "Europe") raise IsADirectoryError.
        raise UnknownTimeZoneError(f"Unknown timezone: {name!r}") from e


def resolve_time_zone_or_utc(name: str | None, *, owner: str | None = None) -> tzinfo:
    """Return tzinfo for name, falling back to UTC (with a warning) when unknown."""
    try:
        return get_time_zone(name)
    except UnknownTimeZoneError:
        logger.warning(
            "Invalid timezone %r for user %s, falling back to UTC", name, owner
        )
        return UTC


def is_valid_time_zone(name: str | None) -> bool:
    """True if name resolves to a zone (empty counts as UTC)."""
    try:
        get_time_zone(name)
    except UnknownTimeZoneError:
        return False
    return True


def to_local(instant_utc: datetime, tz: tzinfo) -> datetime:
    """Convert an aware UTC instant to wall-clock time in tz."""
    return instant_utc.astimezone(tz)


def local_time_on_date_to_utc(local_now: datetime, at: time, tz: tzinfo) -> datetime:
    """Return the UTC instant of `at` on local_now's calendar date in tz.

    The offset is the one in force on that date, so the result moves by an
    hour across DST transitions. A wall time inside a spring-forward gap
    resolves with the pre-transition offset (fold=0); an ambiguous
    fall-back time resolves to its first occurrence.
    """
    local = datetime.combine(local_now.date(), at.replace(tzinfo=None), tzinfo=tz)
    return local.astimezone(UTC)


def same_local_date(a_utc: datetime, b_utc: datetime, tz: tzinfo) -> bool:
    """True when both instants fall on the same calendar date in tz."""
    return to_local(a_utc, tz).date() == to_local(b_utc, tz).date()
