"""
Roster cards and the attendance list.

Both views walk the roster in its own order and derive every label from
the stored record; users with no record for a date render as unpunched.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from timeclock.api.v1.deps import get_clock, get_roster, get_store
from timeclock.core.clock import Clock, date_key
from timeclock.core.state_machine import card_indicators, derive_view
from timeclock.schemas.attendance import (AttendanceListResponse, AttendanceRow,
                                          CardListResponse, CardRead, DailyRecord)
from timeclock.services.roster import RosterDirectory
from timeclock.storage.store import AttendanceStore

router = APIRouter(tags=["cards"])

NO_EMPLOYEES_MESSAGE = "No employees to display"


@router.get("/cards", response_model=CardListResponse)
def list_cards(
    store: AttendanceStore = Depends(get_store),
    roster: RosterDirectory = Depends(get_roster),
    clock: Clock = Depends(get_clock),
) -> CardListResponse:
    """One card per employee with today's punch state."""
    today = date_key(clock.now())
    cards = []
    for user_id, entry in roster.get_all().items():
        record = store.get_record(user_id, today)
        if record is None:
            record = DailyRecord()
        cards.append(
            CardRead(
                user_id=user_id,
                name=entry.name,
                department=entry.department,
                date=today,
                start_time=record.start_time,
                finish_time=record.finish_time,
                indicators=card_indicators(record),
                view=derive_view(record),
            )
        )
    return CardListResponse(
        date=today,
        cards=cards,
        message=None if cards else NO_EMPLOYEES_MESSAGE,
    )


@router.get("/attendance", response_model=AttendanceListResponse)
def attendance_list(
    store: AttendanceStore = Depends(get_store),
    roster: RosterDirectory = Depends(get_roster),
    clock: Clock = Depends(get_clock),
) -> AttendanceListResponse:
    """Every stored date per employee, plus today, oldest first."""
    today = date_key(clock.now())
    rows = []
    for user_id, entry in roster.get_all().items():
        records = store.records_for(user_id)
        for day in sorted(set(records) | {today}):
            record = records.get(day, DailyRecord())
            view = derive_view(record)
            rows.append(
                AttendanceRow(
                    user_id=user_id,
                    name=entry.name,
                    department=entry.department,
                    date=day,
                    start_time=view.start_label,
                    finish_time=view.finish_label,
                )
            )
    return AttendanceListResponse(
        today=today,
        rows=rows,
        message=None if len(roster) else NO_EMPLOYEES_MESSAGE,
    )
