from collections.abc import Iterable
from datetime import datetime

from eventshare.core.datetime_utils import is_same_month, to_local
from eventshare.schemas.event import Event, EventStatus


def is_eligible(event: Event, now: datetime) -> bool:
    """
    Check whether an event belongs in this month's share text.

    Approved events starting later this month qualify. Time of day is
    ignored, so an event earlier today still counts.
    """
    if event.status != EventStatus.APPROVED:
        return False

    start = to_local(event.start_date, now.tzinfo)
    return is_same_month(start, now) and start.day >= now.day


def filter_eligible(events: Iterable[Event], now: datetime) -> list[Event]:
    """
    Select approved events from today through the end of the current month.

    Args:
        events: Candidate events in any order
        now: Reference time; aware event times are compared in its timezone

    Returns:
        Eligible events in input order (empty when nothing matches)
    """
    return [event for event in events if is_eligible(event, now)]
