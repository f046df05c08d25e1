"""
Punch orchestration: roster lookup + state machine + store.

Each call works on today's record for one user, persists only when the
state machine actually changed something, and always reports the view
state derived from the record as it stands afterwards.
"""

from __future__ import annotations

import logging
from datetime import datetime

from timeclock.core.clock import date_key, time_key
from timeclock.core.state_machine import derive_view, punch_in, punch_out
from timeclock.schemas.attendance import DailyRecord, PunchResponse
from timeclock.services.roster import RosterDirectory
from timeclock.storage.store import AttendanceStore

logger = logging.getLogger(__name__)

EVENT_IN = "IN"
EVENT_OUT = "OUT"


def _response(
    event: str,
    user_id: str,
    roster: RosterDirectory,
    day: str,
    record: DailyRecord,
    success: bool,
    detail: str | None = None,
) -> PunchResponse:
    user = roster.lookup(user_id)
    return PunchResponse(
        success=success,
        event=event,
        user_id=user_id,
        name=user.name,
        department=user.department,
        date=day,
        time=record.start_time if event == EVENT_IN else record.finish_time,
        view=derive_view(record),
        detail=detail,
    )


def record_punch_in(
    store: AttendanceStore, roster: RosterDirectory, user_id: str, now: datetime
) -> PunchResponse:
    day, time = date_key(now), time_key(now)
    record = store.get_or_create_record(user_id, day)

    if not punch_in(record, time):
        logger.info("Ignored punch-in for %s on %s: already punched in", user_id, day)
        return _response(EVENT_IN, user_id, roster, day, record, False, "Already punched in")

    user = roster.lookup(user_id)
    record.annotate(userName=user.name, department=user.department, timestamp=now.isoformat())
    store.save()
    logger.info(
        "User %s (%s, %s) punched in on %s at %s",
        user_id, user.name, user.department, day, time,
    )
    return _response(EVENT_IN, user_id, roster, day, record, True)


def record_punch_out(
    store: AttendanceStore, roster: RosterDirectory, user_id: str, now: datetime
) -> PunchResponse:
    day, time = date_key(now), time_key(now)
    record = store.get_record(user_id, day)

    if record is None:
        logger.warning("No punch-in record for %s on %s; cannot punch out", user_id, day)
        return _response(
            EVENT_OUT, user_id, roster, day, DailyRecord(), False, "No punch-in recorded today"
        )

    if not punch_out(record, time):
        logger.info("Ignored punch-out for %s on %s: not punched in", user_id, day)
        return _response(EVENT_OUT, user_id, roster, day, record, False, "Punch-out not available")

    user = roster.lookup(user_id)
    record.annotate(timestamp=now.isoformat())
    store.save()
    logger.info(
        "User %s (%s, %s) punched out on %s at %s",
        user_id, user.name, user.department, day, time,
    )
    return _response(EVENT_OUT, user_id, roster, day, record, True)
