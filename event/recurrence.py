"""
Occurrence math for calendar events.

Functions take any object exposing `date`, `recurring`, `frequency` and
`original_date` (an Event row, a schema, a SimpleNamespace). Candidates may be
dates or datetimes; a datetime is reduced to its calendar date, which is the
same as comparing both sides at the event's own time of day.
"""
from __future__ import annotations
import calendar
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, NamedTuple, Optional

from .models import Frequency


class Occurrence(NamedTuple):
    event: object
    date: date


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _frequency(event) -> Optional[Frequency]:
    if not getattr(event, "recurring", False) or event.frequency is None:
        return None
    return Frequency(event.frequency)


def anchor_date(event) -> date:
    """First date of the series: `original_date`, falling back to `date`."""
    return _as_date(event.original_date or event.date)


def _nth_month(anchor: date, n: int) -> Optional[date]:
    """The anchor's day-of-month `n` months later, or None when that month is too short."""
    months = anchor.month - 1 + n
    year, month = anchor.year + months // 12, months % 12 + 1
    if anchor.day > calendar.monthrange(year, month)[1]:
        return None
    return date(year, month, anchor.day)


def _nth_year(anchor: date, n: int) -> Optional[date]:
    year = anchor.year + n
    if anchor.month == 2 and anchor.day == 29 and not calendar.isleap(year):
        return None
    return date(year, anchor.month, anchor.day)


def is_occurrence(event, candidate: date | datetime) -> bool:
    """True when `candidate` is a date produced by a recurring event's series."""
    freq = _frequency(event)
    if freq is None:
        return False
    anchor = anchor_date(event)
    day = _as_date(candidate)
    if day < anchor:
        return False
    if freq is Frequency.weekly:
        return (day - anchor).days % 7 == 0
    if freq is Frequency.monthly:
        return day.day == anchor.day
    return day.month == anchor.month and day.day == anchor.day


def occurs_on(event, candidate: date | datetime) -> bool:
    """Recurring series or one-off event: does it happen on this calendar day?"""
    if _frequency(event) is not None:
        return is_occurrence(event, candidate)
    return _as_date(event.date) == _as_date(candidate)


def occurrences_in_range(event, range_start: date | datetime, range_end: date | datetime) -> Iterator[date]:
    """
    Yield, in ascending order, every date in [range_start, range_end] on which
    the event happens.

    Steps are counted from the anchor (anchor + n weeks/months/years), so a
    month without the anchor's day is skipped without shifting later dates.
    The walk starts at the first step that can reach the range instead of
    stepping there one by one. A one-off event yields its own date when it
    falls inside the range.
    """
    start, end = _as_date(range_start), _as_date(range_end)
    if end < start:
        return
    freq = _frequency(event)
    if freq is None:
        day = _as_date(event.date)
        if start <= day <= end:
            yield day
        return

    anchor = anchor_date(event)
    if freq is Frequency.weekly:
        n = max(0, -(-(start - anchor).days // 7))
        day = anchor + timedelta(weeks=n)
        while day <= end:
            yield day
            day += timedelta(weeks=1)
        return

    if freq is Frequency.monthly:
        step = _nth_month
        n = max(0, (start.year - anchor.year) * 12 + start.month - anchor.month)
    else:
        step = _nth_year
        n = max(0, start.year - anchor.year)

    while True:
        day = step(anchor, n)
        if day is None:
            n += 1
            continue
        if day > end:
            return
        if day >= start:
            yield day
        n += 1


def expand_events(events: Iterable, range_start: date | datetime, range_end: date | datetime) -> list[Occurrence]:
    """Concrete (event, date) pairs for a calendar window, ordered by date then start time."""
    out = [
        Occurrence(event, day)
        for event in events
        for day in occurrences_in_range(event, range_start, range_end)
    ]
    out.sort(key=lambda o: (o.date, getattr(o.event, "start_time", "") or ""))
    return out
