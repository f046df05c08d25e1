"""
Modal selection + punch-in / punch-out.

The modal is per client session: opening it selects a user, punching acts
on the selected user for today, and a successful punch closes it. Nothing
here answers with an error status for bad transitions or unknown users;
the response carries ``success=false`` and the unchanged view state.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Path

from timeclock.api.v1.deps import get_clock, get_kiosk_session, get_roster, get_store
from timeclock.core.clock import Clock, date_key
from timeclock.core.state_machine import derive_view
from timeclock.schemas.attendance import (CloseModalResponse, DailyRecord, ModalResponse,
                                          PunchResponse)
from timeclock.services.kiosk import KioskSession
from timeclock.services.punch import EVENT_IN, EVENT_OUT, record_punch_in, record_punch_out
from timeclock.services.roster import RosterDirectory
from timeclock.storage.store import AttendanceStore

router = APIRouter(tags=["punch"])
logger = logging.getLogger(__name__)

_USER_ID_PATTERN = r"^[A-Za-z0-9:_-]{1,64}$"


# ── Modal ───────────────────────────────────────────────────────────
@router.post("/modal/{user_id}", response_model=ModalResponse)
def open_modal(
    user_id: str = Path(pattern=_USER_ID_PATTERN),
    kiosk: KioskSession = Depends(get_kiosk_session),
    store: AttendanceStore = Depends(get_store),
    roster: RosterDirectory = Depends(get_roster),
    clock: Clock = Depends(get_clock),
) -> ModalResponse:
    """Select *user_id* and return the controls for today's record."""
    today = date_key(clock.now())
    known = roster.contains(user_id)
    if not known:
        logger.warning("Modal opened for user %s not in the roster", user_id)

    record = store.get_record(user_id, today)
    if record is None:
        record = DailyRecord()

    kiosk.select(user_id)
    user = roster.lookup(user_id)
    return ModalResponse(
        user_id=user_id,
        name=user.name,
        department=user.department,
        known_user=known,
        date=today,
        view=derive_view(record),
    )


@router.delete("/modal", response_model=CloseModalResponse)
def close_modal(kiosk: KioskSession = Depends(get_kiosk_session)) -> CloseModalResponse:
    kiosk.close_modal()
    return CloseModalResponse(closed=True)


# ── Punch ───────────────────────────────────────────────────────────
def _no_selection(event: str, clock: Clock) -> PunchResponse:
    logger.warning("Punch %s requested with no employee selected", event)
    return PunchResponse(
        success=False,
        event=event,
        date=date_key(clock.now()),
        detail="No employee selected",
    )


@router.post("/punch/in", response_model=PunchResponse)
def punch_in(
    kiosk: KioskSession = Depends(get_kiosk_session),
    store: AttendanceStore = Depends(get_store),
    roster: RosterDirectory = Depends(get_roster),
    clock: Clock = Depends(get_clock),
) -> PunchResponse:
    """Punch in the selected employee for today."""
    if kiosk.selected_user_id is None:
        return _no_selection(EVENT_IN, clock)

    result = record_punch_in(store, roster, kiosk.selected_user_id, clock.now())
    if result.success:
        kiosk.close_modal()
    return result


@router.post("/punch/out", response_model=PunchResponse)
def punch_out(
    kiosk: KioskSession = Depends(get_kiosk_session),
    store: AttendanceStore = Depends(get_store),
    roster: RosterDirectory = Depends(get_roster),
    clock: Clock = Depends(get_clock),
) -> PunchResponse:
    """Punch out the selected employee for today."""
    if kiosk.selected_user_id is None:
        return _no_selection(EVENT_OUT, clock)

    result = record_punch_out(store, roster, kiosk.selected_user_id, clock.now())
    if result.success:
        kiosk.close_modal()
    return result
