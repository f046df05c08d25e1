"""
Punch lifecycle for one (user, date) record.

    UNPUNCHED --punch_in--> PUNCHED_IN --punch_out--> PUNCHED_OUT

PUNCHED_OUT is terminal for the day. Calls from the wrong state are no-ops
and report ``False``; nothing here raises. View state is always derived
from the record and never stored alongside it.
"""

from __future__ import annotations

from enum import Enum

from timeclock.schemas.attendance import (UNPUNCHED_LABEL, CardIndicators,
                                          DailyRecord, UIViewState)


class AttendanceState(str, Enum):
    UNPUNCHED = "UNPUNCHED"
    PUNCHED_IN = "PUNCHED_IN"
    PUNCHED_OUT = "PUNCHED_OUT"


def state_of(record: DailyRecord) -> AttendanceState:
    if not record.punched_in:
        return AttendanceState.UNPUNCHED
    if record.finish_time is None:
        return AttendanceState.PUNCHED_IN
    return AttendanceState.PUNCHED_OUT


def punch_in(record: DailyRecord, now_time: str) -> bool:
    """Record the start time. Returns whether the record changed."""
    if state_of(record) is not AttendanceState.UNPUNCHED:
        return False
    record.start_time = now_time
    record.punched_in = True
    return True


def punch_out(record: DailyRecord, now_time: str) -> bool:
    """Record the finish time. Returns whether the record changed."""
    if state_of(record) is not AttendanceState.PUNCHED_IN or record.start_time is None:
        return False
    record.finish_time = now_time
    return True


def derive_view(record: DailyRecord) -> UIViewState:
    return UIViewState(
        punch_in_enabled=not record.punched_in,
        punch_out_enabled=record.punched_in and record.finish_time is None,
        start_label=record.start_time if record.start_time is not None else UNPUNCHED_LABEL,
        finish_label=record.finish_time if record.finish_time is not None else UNPUNCHED_LABEL,
    )


def card_indicators(record: DailyRecord) -> CardIndicators:
    return CardIndicators(
        in_active=record.punched_in,
        out_active=record.finish_time is not None,
    )
