from collections.abc import Iterable
from datetime import datetime, tzinfo

from eventshare.core.datetime_utils import to_local
from eventshare.schemas.event import Event


def format_date(value: datetime) -> str:
    """Format a date as zero-padded MM/DD (no year)."""
    return f"{value.month:02d}/{value.day:02d}"


def format_line(event: Event, tz: tzinfo | None = None) -> str:
    """
    Format a single event as a share text line.

    The title is used verbatim: the share field is plain text, so nothing
    is escaped.

    Args:
        event: Event to format
        tz: Timezone the date is shown in (aware start dates only)

    Returns:
        "MM/DD title"
    """
    return f"{format_date(to_local(event.start_date, tz))} {event.title}"


def format_and_sort_lines(events: Iterable[Event], tz: tzinfo | None = None) -> list[str]:
    """Format events as lines, earliest start first (ties keep input order)."""
    ordered = sorted(events, key=lambda event: event.start_date)
    return [format_line(event, tz) for event in ordered]
