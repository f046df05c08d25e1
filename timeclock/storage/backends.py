"""
Key-value storage media for the attendance blob.

Both backends expose the same two synchronous calls, so the store never
knows which persistence scope it is running under:

- ``MemoryStorage``   — lives as long as the client session that owns it.
- ``DatabaseStorage`` — rows in ``storage_entries``, survives restarts.
"""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from timeclock.models.storage_entry import StorageEntry

logger = logging.getLogger(__name__)


class StorageMedium(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def ping(self) -> bool: ...


class MemoryStorage:
    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def ping(self) -> bool:
        return True


class DatabaseStorage:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, key: str) -> str | None:
        entry = self.session.get(StorageEntry, key)
        return entry.value if entry is not None else None

    def set(self, key: str, value: str) -> None:
        entry = self.session.get(StorageEntry, key)
        if entry is None:
            self.session.add(StorageEntry(key=key, value=value))
        else:
            entry.value = value
        self.session.commit()
        logger.debug("Stored %d bytes under %r", len(value), key)

    def ping(self) -> bool:
        self.session.execute(select(1))
        return True
