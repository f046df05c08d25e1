"""
FastAPI dependencies — kiosk session, storage medium, store, roster, clock.
"""

from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from timeclock.core.clock import Clock
from timeclock.core.config import settings
from timeclock.db.session import session_factory
from timeclock.services.kiosk import KioskSession, registry
from timeclock.services.roster import RosterDirectory, build_roster
from timeclock.storage.backends import DatabaseStorage, StorageMedium
from timeclock.storage.store import AttendanceStore

_clock = Clock()


# ── Database session ────────────────────────────────────────────────
def get_db() -> Generator[Session, None, None]:
    with session_factory() as session:
        yield session


# ── Time & roster ───────────────────────────────────────────────────
def get_clock() -> Clock:
    return _clock


@lru_cache(maxsize=1)
def get_roster() -> RosterDirectory:
    return build_roster()


# ── Kiosk session (cookie) ──────────────────────────────────────────
def get_kiosk_session(request: Request, response: Response) -> KioskSession:
    """Resolve the caller's kiosk session, issuing a cookie on first contact."""
    cookie = request.cookies.get(settings.SESSION_COOKIE_NAME)
    session = registry.get_or_create(cookie)
    if session.session_id != cookie:
        response.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=session.session_id,
            httponly=True,
            samesite="lax",
        )
    return session


# ── Storage ─────────────────────────────────────────────────────────
def get_storage(
    kiosk: KioskSession = Depends(get_kiosk_session),
    db: Session = Depends(get_db),
) -> StorageMedium:
    """Pick the medium for the configured persistence scope."""
    if settings.PERSISTENCE_SCOPE == "durable":
        return DatabaseStorage(db)
    return kiosk.storage


def get_store(storage: StorageMedium = Depends(get_storage)) -> AttendanceStore:
    """A store freshly hydrated from the medium for this request."""
    store = AttendanceStore(storage)
    store.load()
    return store
