"""
Local wall-clock time source and the formats derived from it.

Records store minute granularity only (``HH:MM``); seconds appear in the
ambient clock display and nowhere else.
"""

from __future__ import annotations

from datetime import datetime

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class Clock:
    """Wall-clock source. Tests swap in a :class:`FixedClock`."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


def date_key(dt: datetime) -> str:
    """``YYYY-MM-DD`` partition key in local time."""
    return f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"


def time_key(dt: datetime) -> str:
    """``HH:MM`` as stored in punch records."""
    return f"{dt.hour:02d}:{dt.minute:02d}"


def date_display(dt: datetime) -> str:
    return f"{_MONTHS[dt.month - 1]} {dt.day}, {dt.year} ({_WEEKDAYS[dt.weekday()]})"


def time_display(dt: datetime) -> str:
    return f"{dt.hour:02d} : {dt.minute:02d} : {dt.second:02d}"
