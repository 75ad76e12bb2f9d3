"""Centralized datetime utilities for consistent timezone handling.

Event start times arrive from the upstream API as ISO 8601 strings, usually
with an offset. Eligibility and MM/DD formatting are decided on the calendar
date as seen in the calendar's own timezone, so aware datetimes are converted
before any year/month/day comparison.

Usage:
    from eventshare.core.datetime_utils import local_now, to_local

    now = local_now("Asia/Tokyo")
    start = to_local(event.start_date, now.tzinfo)
"""

from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    """Get current UTC time as an aware datetime."""
    return datetime.now(UTC)


def is_valid_timezone(tz_name: str) -> bool:
    """Check if a timezone name is valid IANA identifier.

    Args:
        tz_name: Timezone string (e.g., "Asia/Tokyo")

    Returns:
        True if valid IANA timezone
    """
    try:
        ZoneInfo(tz_name)
        return True
    except (KeyError, ValueError):
        return False


def get_zone(timezone: str) -> ZoneInfo:
    """Resolve an IANA timezone name, falling back to UTC."""
    try:
        return ZoneInfo(timezone)
    except (KeyError, ValueError):
        return ZoneInfo("UTC")


def local_now(timezone: str) -> datetime:
    """Get current time in the given timezone.

    Args:
        timezone: IANA timezone string (e.g., "Asia/Tokyo")

    Returns:
        Aware datetime in the local timezone (UTC for invalid names)
    """
    return datetime.now(get_zone(timezone))


def to_local(dt: datetime, tz: tzinfo | None) -> datetime:
    """Express an aware datetime in ``tz``.

    Naive datetimes, or a missing ``tz``, are returned unchanged: a naive
    value is taken to already be local wall-clock time.
    """
    if tz is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(tz)


def is_same_month(dt: datetime, reference: datetime) -> bool:
    """Check whether two datetimes fall in the same calendar year and month."""
    return dt.year == reference.year and dt.month == reference.month


def epoch_millis(dt: datetime) -> int:
    """Milliseconds since the Unix epoch (naive values are read as UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp() * 1000)
