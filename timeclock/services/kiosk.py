"""
Per-client presentation state.

Each kiosk client (identified by a session cookie) gets a ``KioskSession``
holding the user whose modal is open and, for the ``session`` persistence
scope, the memory storage its attendance data lives in. Closing the modal
only clears the selection; committed records are untouched.

Session ids are always minted here. A cookie naming a session the registry
does not hold starts a fresh one, and the least recently used session is
dropped once ``SESSION_LIMIT`` is reached.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field

from timeclock.core.config import settings
from timeclock.storage.backends import MemoryStorage

logger = logging.getLogger(__name__)


@dataclass
class KioskSession:
    session_id: str
    storage: MemoryStorage = field(default_factory=MemoryStorage)
    selected_user_id: str | None = None

    def select(self, user_id: str) -> None:
        self.selected_user_id = user_id

    def close_modal(self) -> None:
        self.selected_user_id = None


class SessionRegistry:
    def __init__(self, limit: int | None = None) -> None:
        self.limit = settings.SESSION_LIMIT if limit is None else limit
        self._sessions: OrderedDict[str, KioskSession] = OrderedDict()
        self._lock = threading.Lock()

    def get_or_create(self, session_id: str | None) -> KioskSession:
        with self._lock:
            if session_id and session_id in self._sessions:
                self._sessions.move_to_end(session_id)
                return self._sessions[session_id]

            session = KioskSession(session_id=uuid.uuid4().hex)
            self._sessions[session.session_id] = session
            while len(self._sessions) > self.limit:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Dropped idle kiosk session %s", evicted[:8])
        logger.info("Started kiosk session %s", session.session_id[:8])
        return session

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


registry = SessionRegistry()
