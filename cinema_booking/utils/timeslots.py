from datetime import date, datetime, time
from typing import Optional


def intervals_overlap(start: time, end: time, other_start: time, other_end: time) -> bool:
    """
    Half-open overlap test for [start, end) and [other_start, other_end).

    Intervals that only touch at a boundary (end == other_start) do not overlap.
    """
    return start < other_end and end > other_start


def is_valid_interval(start: time, end: time) -> bool:
    return end > start


def local_now(now: Optional[datetime] = None) -> datetime:
    """`now` (default: current time) as a naive local datetime."""
    now = now or datetime.now()
    if now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    return now


def showtime_has_started(show_date: date, start_time: time, now: Optional[datetime] = None) -> bool:
    """
    True when the show's date+start time is strictly earlier than `now`.

    show_date/start_time are stored as timezone-naive local values, so `now`
    is compared in local time as well.
    """
    return datetime.combine(show_date, start_time) < local_now(now)
