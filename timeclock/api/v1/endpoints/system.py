"""
Ambient clock and health endpoints. Neither reads nor writes attendance data.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from timeclock.api.v1.deps import get_clock, get_storage
from timeclock.core.clock import Clock, date_display, date_key, time_display
from timeclock.core.config import settings
from timeclock.schemas.attendance import ClockResponse, HealthResponse
from timeclock.storage.backends import StorageMedium

router = APIRouter(tags=["system"])
logger = logging.getLogger(__name__)


@router.get("/clock", response_model=ClockResponse)
def clock_tick(clock: Clock = Depends(get_clock)) -> ClockResponse:
    """Current date and time for the kiosk header; polled every second."""
    now = clock.now()
    return ClockResponse(
        date_key=date_key(now),
        date_display=date_display(now),
        time_display=time_display(now),
    )


@router.get("/health", response_model=HealthResponse)
def health(storage: StorageMedium = Depends(get_storage)) -> HealthResponse:
    """Storage medium reachability for the active persistence scope."""
    result = HealthResponse(storage=False, persistence_scope=settings.PERSISTENCE_SCOPE)
    try:
        result.storage = storage.ping()
    except Exception as e:
        logger.error("Health check storage failure: %s", e)
    return result
