"""
Roster directory — static user id → name / department lookup.

Read-only. Order of ``get_all()`` is the order of the source, which is
what card and list rendering iterate in.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from timeclock.core.config import settings
from timeclock.schemas.roster import RosterEntry

logger = logging.getLogger(__name__)

UNKNOWN_USER = RosterEntry(name="unknown user", department="unknown department")

DEFAULT_ROSTER: dict[str, RosterEntry] = {
    "u1": RosterEntry(name="Haruto Sato", department="Sales"),
    "u2": RosterEntry(name="Yui Suzuki", department="Sales"),
    "u3": RosterEntry(name="Sota Takahashi", department="Engineering"),
    "u4": RosterEntry(name="Mio Tanaka", department="Engineering"),
    "u5": RosterEntry(name="Ren Watanabe", department="Accounting"),
    "u6": RosterEntry(name="Aoi Ito", department="General Affairs"),
}

_roster_adapter: TypeAdapter[dict[str, RosterEntry]] = TypeAdapter(dict[str, RosterEntry])


class RosterDirectory:
    def __init__(self, entries: dict[str, RosterEntry] | None = None) -> None:
        self._entries: dict[str, RosterEntry] = dict(
            DEFAULT_ROSTER if entries is None else entries
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "RosterDirectory":
        """Load ``{"u1": {"name": ..., "department": ...}, ...}``.

        An unreadable or malformed file gives an empty roster.
        """
        path = Path(path)
        try:
            entries = _roster_adapter.validate_json(path.read_bytes())
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.error("Could not load roster from %s: %s", path, e)
            return cls({})
        logger.info("Loaded %d roster entries from %s", len(entries), path)
        return cls(entries)

    def get_all(self) -> dict[str, RosterEntry]:
        return dict(self._entries)

    def contains(self, user_id: str) -> bool:
        return user_id in self._entries

    def lookup(self, user_id: str) -> RosterEntry:
        """Entry for *user_id*, or the ``unknown user`` placeholder."""
        return self._entries.get(user_id, UNKNOWN_USER)

    def __len__(self) -> int:
        return len(self._entries)


def build_roster() -> RosterDirectory:
    if settings.ROSTER_FILE:
        return RosterDirectory.from_file(settings.ROSTER_FILE)
    return RosterDirectory()
