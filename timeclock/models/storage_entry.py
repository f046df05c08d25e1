"""
Key-value model backing the durable storage medium.

One row per storage key; the attendance dataset lives in a single row as a
JSON blob and is overwritten in full on every save.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from timeclock.db.base import Base


class StorageEntry(Base):
    __tablename__ = "storage_entries"

    key: str = Column(String(200), primary_key=True)  # type: ignore[assignment]
    value: str = Column(Text, nullable=False)  # type: ignore[assignment]
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
